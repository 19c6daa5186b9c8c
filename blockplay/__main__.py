"""Allow ``python -m blockplay``."""

from blockplay.cli import main

if __name__ == "__main__":
    main()
