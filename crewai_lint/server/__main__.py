"""Module entrypoint for `python -m crewai_lint.server`."""

from .server import main


if __name__ == "__main__":
    main()
