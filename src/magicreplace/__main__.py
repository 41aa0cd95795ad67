"""Allow ``python -m magicreplace`` to launch the CLI."""

from magicreplace.ui.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
