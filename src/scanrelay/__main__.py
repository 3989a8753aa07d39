"""Allow running as python -m scanrelay."""

from scanrelay.cli import main

if __name__ == "__main__":
    main()
