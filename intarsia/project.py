"""
Named projects on disk.

A project is a directory ``<projects_dir>/<name>/`` holding the source
photo (``original.png``), the pipeline intermediates and the final
``processed.png`` pattern. The storage root is always passed in; the CLI
supplies ``config.DEFAULT_PROJECTS_DIR`` when the user gives none.
"""
from __future__ import annotations
import logging
import os
import shutil
import subprocess
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import numpy as np

from intarsia import config
from intarsia.errors import (
    EmptyImage,
    InvalidProjectPath,
    OpenFailure,
    ProjectExists,
    StorageFailure,
    ProjectNotFound,
)
from intarsia.io_utils import load_image, save_image_rgb
from intarsia.pattern.compose import PatternResult, pattern_from_image

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

class ImageType(Enum):
    ORIGINAL = "original"
    PROCESSED = "processed"

@dataclass
class ProjectImage:
    image_type: ImageType
    path: Path
    data: np.ndarray

def _project_path(name: str, projects_dir: Optional[PathLike]) -> Path:
    if not name or name in (".", "..") or "/" in name or "\\" in name or os.sep in name:
        raise InvalidProjectPath(f"Invalid project name: {name!r}")
    root = Path(config.DEFAULT_PROJECTS_DIR if projects_dir is None else projects_dir).expanduser()
    if root.exists() and not root.is_dir():
        raise InvalidProjectPath(f"Projects path is not a directory: {root}")
    return root / name

def _viewer_command(path: Path) -> list:
    if sys.platform == "darwin":
        return ["open", str(path)]
    return ["xdg-open", str(path)]

@dataclass
class Project:
    name: str
    path: Path
    original_image: Optional[ProjectImage] = None
    processed_image: Optional[ProjectImage] = None

    @classmethod
    def new(
        cls,
        name: str,
        image_path: PathLike,
        grid_width: int,
        grid_height: int,
        colours: int,
        add_axes: bool = False,
        projects_dir: Optional[PathLike] = None,
        **pipeline_kwargs,
    ) -> "Project":
        """
        Create ``<projects_dir>/<name>``, import the image at image_path and
        turn it into a grid_width x grid_height pattern with `colours` colours.
        If anything fails after the directory was created it is removed again.
        """
        path = _project_path(name, projects_dir)
        if path.exists():
            raise ProjectExists(f"Project {name!r} exists already at {path}")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.mkdir()
        except FileExistsError as e:
            raise ProjectExists(f"Project {name!r} exists already at {path}") from e
        except OSError as e:
            raise StorageFailure(f"Could not create project directory {path}: {e}") from e
        project = cls(name=name, path=path)
        try:
            project.read_image(image_path)
            project.transform_image(grid_width, grid_height, colours, add_axes=add_axes, **pipeline_kwargs)
        except BaseException:
            logger.info("rolling back partially created project %s", path)
            try:
                project.remove()
            except StorageFailure as cleanup_error:
                logger.warning("rollback left files behind: %s", cleanup_error)
            raise
        logger.info("created project %s at %s", name, path)
        return project

    @classmethod
    def find(cls, name: str, projects_dir: Optional[PathLike] = None) -> "Project":
        """Locate an existing project without decoding its images."""
        path = _project_path(name, projects_dir)
        if not path.is_dir():
            raise ProjectNotFound(f"Project {name!r} does not exist yet ({path})")
        return cls(name=name, path=path)

    @classmethod
    def load(cls, name: str, projects_dir: Optional[PathLike] = None) -> "Project":
        project = cls.find(name, projects_dir)
        path = project.path
        original = path / config.ORIGINAL_FILE
        project.original_image = ProjectImage(ImageType.ORIGINAL, original, load_image(original))
        processed = path / config.PROCESSED_FILE
        project.processed_image = ProjectImage(ImageType.PROCESSED, processed, load_image(processed))
        return project

    def image(self, image_type: ImageType) -> ProjectImage:
        image = self.original_image if image_type is ImageType.ORIGINAL else self.processed_image
        if image is None:
            raise EmptyImage(f"There is no {image_type.value} image in project {self.name!r}")
        return image

    def show(self, image_type: ImageType = ImageType.PROCESSED) -> None:
        """Open the original or processed image in the OS image viewer."""
        image_file = self.image(image_type).path
        try:
            if sys.platform.startswith("win"):
                os.startfile(str(image_file))  # type: ignore[attr-defined]
                return
            subprocess.run(_viewer_command(image_file), check=True, capture_output=True)
        except (OSError, subprocess.CalledProcessError) as e:
            raise OpenFailure(
                f"Could not show {image_file}; the environment may not provide an image viewer: {e}"
            ) from e

    def remove(self) -> None:
        """Delete the project directory if it exists."""
        if self.path.exists():
            try:
                shutil.rmtree(self.path)
            except OSError as e:
                raise StorageFailure(f"Could not remove project directory {self.path}: {e}") from e
            logger.info("removed project %s", self.path)

    def read_image(self, image_path: PathLike) -> ProjectImage:
        """Decode image_path and store it in the project as original.png."""
        data = load_image(image_path)
        saved = save_image_rgb(self.path / config.ORIGINAL_FILE, data)
        self.original_image = ProjectImage(ImageType.ORIGINAL, saved, data)
        return self.original_image

    def transform_image(
        self,
        grid_width: int,
        grid_height: int,
        colours: int,
        add_axes: bool = False,
        **pipeline_kwargs,
    ) -> PatternResult:
        """Run the pattern pipeline on the original image and write every stage to disk."""
        original = self.image(ImageType.ORIGINAL)
        result = pattern_from_image(
            original.data, grid_width, grid_height, colours, add_axes=add_axes, **pipeline_kwargs
        )
        save_image_rgb(self.path / config.RESIZED_DOWN_FILE, result.resized_down)
        save_image_rgb(self.path / config.RESIZED_UP_FILE, result.resized_up)
        save_image_rgb(self.path / config.QUANTIZED_FILE, result.quantized)
        processed = save_image_rgb(self.path / config.PROCESSED_FILE, result.processed)
        self.processed_image = ProjectImage(ImageType.PROCESSED, processed, result.processed)
        return result
