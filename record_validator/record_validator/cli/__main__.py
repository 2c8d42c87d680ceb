"""Module entrypoint for `python -m record_validator.cli`.

Delegates to the CLI implementation.
"""

from .run_validate import main


if __name__ == "__main__":
    main()
