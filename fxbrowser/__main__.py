"""``python -m fxbrowser`` runs the same entry point as the ``fxbrowser`` script."""

from .cli import main


if __name__ == "__main__":
    main()
