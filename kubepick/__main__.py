"""Allow ``python -m kubepick``."""

from kubepick.app import main

if __name__ == "__main__":
    main()
