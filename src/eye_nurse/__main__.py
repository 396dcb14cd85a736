"""Entry point for ``python -m eye_nurse``."""

from .main import main

if __name__ == "__main__":
    main()
