"""Module entrypoint for `python -m structcheck.cli`."""

from .run_check import run


if __name__ == "__main__":
    run()
