import subprocess

import numpy as np
import pytest

from intarsia import config
from intarsia.errors import (
    CodecFailure,
    EmptyImage,
    InvalidProjectPath,
    OpenFailure,
    PaletteTooSmall,
    ProjectExists,
    ProjectNotFound,
    StorageFailure,
)
from intarsia.io_utils import load_image, save_image_rgb
from intarsia.project import ImageType, Project

@pytest.fixture
def photo(tmp_path, red_blue_image):
    return save_image_rgb(tmp_path / "photo.png", red_blue_image)

@pytest.fixture
def projects(tmp_path):
    return tmp_path / "projects"

def test_new_writes_every_stage(photo, projects):
    project = Project.new("scarf", photo, 5, 5, 2, projects_dir=projects)
    assert project.path == projects / "scarf"
    for name in (config.ORIGINAL_FILE, config.RESIZED_DOWN_FILE, config.RESIZED_UP_FILE,
                 config.QUANTIZED_FILE, config.PROCESSED_FILE):
        assert (project.path / name).is_file()
    assert load_image(project.path / config.RESIZED_DOWN_FILE).shape == (5, 5, 3)
    np.testing.assert_array_equal(load_image(project.path / config.PROCESSED_FILE),
                                  project.processed_image.data)

def test_load_and_remove(photo, projects):
    Project.new("scarf", photo, 5, 5, 2, projects_dir=projects)
    project = Project.load("scarf", projects_dir=projects)
    assert project.original_image.image_type is ImageType.ORIGINAL
    assert project.original_image.data.shape == (100, 100, 3)
    assert project.processed_image.data.shape == (100, 100, 3)
    project.remove()
    assert not (projects / "scarf").exists()
    project.remove()

def test_exists_already(photo, projects):
    Project.new("scarf", photo, 5, 5, 2, projects_dir=projects)
    with pytest.raises(ProjectExists):
        Project.new("scarf", photo, 5, 5, 2, projects_dir=projects)
    assert (projects / "scarf" / config.PROCESSED_FILE).is_file()

def test_load_missing(projects):
    with pytest.raises(ProjectNotFound):
        Project.load("nothing", projects_dir=projects)

def test_missing_image_rolls_back(tmp_path, projects):
    with pytest.raises(CodecFailure):
        Project.new("ghost", tmp_path / "fake_image.png", 5, 5, 2, projects_dir=projects)
    assert not (projects / "ghost").exists()

def test_pipeline_failure_rolls_back(photo, projects):
    with pytest.raises(PaletteTooSmall):
        Project.new("greedy", photo, 5, 5, 3, projects_dir=projects)
    assert not (projects / "greedy").exists()

@pytest.mark.parametrize("name", ["", ".", "..", "a/b"])
def test_invalid_name(name, photo, projects):
    with pytest.raises(InvalidProjectPath):
        Project.new(name, photo, 5, 5, 2, projects_dir=projects)

def test_show_runs_viewer(photo, projects, monkeypatch):
    calls = []
    monkeypatch.setattr("intarsia.project.sys.platform", "linux")
    monkeypatch.setattr(subprocess, "run", lambda cmd, **kw: calls.append(cmd))
    project = Project.new("scarf", photo, 5, 5, 2, projects_dir=projects)
    project.show(ImageType.ORIGINAL)
    project.show()
    assert calls == [
        ["xdg-open", str(project.path / config.ORIGINAL_FILE)],
        ["xdg-open", str(project.path / config.PROCESSED_FILE)],
    ]

def test_show_without_viewer(photo, projects, monkeypatch):
    def boom(cmd, **kw):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr("intarsia.project.sys.platform", "linux")
    monkeypatch.setattr(subprocess, "run", boom)
    project = Project.new("scarf", photo, 5, 5, 2, projects_dir=projects)
    with pytest.raises(OpenFailure):
        project.show()

def test_show_empty(tmp_path):
    project = Project(name="empty", path=tmp_path)
    with pytest.raises(EmptyImage):
        project.show(ImageType.PROCESSED)

def test_storage_root_under_a_file(tmp_path, photo):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    with pytest.raises(StorageFailure):
        Project.new("scarf", photo, 5, 5, 2, projects_dir=blocker / "projects")

def test_failed_rollback_keeps_original_error(photo, projects, monkeypatch):
    def refuse(path, *args, **kwargs):
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr("intarsia.project.shutil.rmtree", refuse)
    with pytest.raises(PaletteTooSmall):
        Project.new("greedy", photo, 5, 5, 3, projects_dir=projects)
