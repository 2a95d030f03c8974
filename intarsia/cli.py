import argparse
import logging
import sys

from intarsia.config import DEFAULT_PROJECTS_DIR, PALETTE_METHOD
from intarsia.errors import IntarsiaError
from intarsia.project import ImageType, Project

WELCOME_MSG = r"""
'||' '|.   '|' |''||''|     |     '||''|.    .|'''.|  '||'     |
 ||   |'|   |     ||       |||     ||   ||   ||..  '   ||     |||
 ||   | '|. |     ||      |  ||    ||''|'     ''|||.   ||    |  ||
 ||   |   |||     ||     .''''|.   ||   |.  .     '||  ||   .''''|.
.||. .|.   '|    .||.   .|.  .||. .||.  '|' |'....|'  .||. .|.  .||.

Turn photos into crochet / cross-stitch patterns.
"""

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intarsia",
        description=WELCOME_MSG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="More log output (-v info, -vv debug)")
    parser.add_argument("--projects-path", type=str, default=str(DEFAULT_PROJECTS_DIR),
                        help="Folder where projects are stored")
    sub = parser.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new", help="Create a new project")
    new.add_argument("name", help="Name of the new project")
    new.add_argument("-i", "--image", required=True, help="Path to the image the project is based on")
    new.add_argument("-W", "--width", type=int, required=True, help="Number of stitches along x")
    new.add_argument("-H", "--height", type=int, required=True, help="Number of stitches along y")
    new.add_argument("-c", "--colours", type=int, required=True, help="Number of colours in the pattern")
    new.add_argument("--axes", action="store_true", help="Add numbered axes to the processed image")
    new.add_argument("--palette", type=str, default=PALETTE_METHOD, choices=["median_cut", "kmeans"],
                     help="Palette extraction method")

    remove = sub.add_parser("remove", help="Remove an existing project")
    remove.add_argument("name", help="Name of the project to remove")

    show = sub.add_parser("show", help="Display the original or processed image of a project")
    show.add_argument("name", help="Name of the project to display")
    show.add_argument("-t", "--type", type=str, default=ImageType.PROCESSED.value,
                      choices=[t.value for t in ImageType], help="Which image to display")
    return parser

def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

def _fail(what: str, err: Exception) -> int:
    print(f"Could not {what}. Error: {err}", file=sys.stderr)
    return 1

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "new":
        try:
            project = Project.new(
                args.name,
                args.image,
                args.width,
                args.height,
                args.colours,
                add_axes=args.axes,
                projects_dir=args.projects_path,
                palette_method=args.palette,
            )
        except (IntarsiaError, ValueError) as e:
            return _fail("create new project", e)
        print(f"✓ Created project {project.name}, stored at {project.path}")
        return 0

    if args.command == "remove":
        try:
            project = Project.find(args.name, projects_dir=args.projects_path)
        except IntarsiaError as e:
            return _fail("load existing project", e)
        try:
            project.remove()
        except IntarsiaError as e:
            return _fail("remove project", e)
        print(f"✓ Removed project {project.name}")
        return 0

    try:
        project = Project.load(args.name, projects_dir=args.projects_path)
    except IntarsiaError as e:
        return _fail("load existing project", e)

    try:
        project.show(ImageType(args.type))
    except IntarsiaError as e:
        return _fail("display image", e)
    return 0


if __name__ == "__main__":
    sys.exit(main())
