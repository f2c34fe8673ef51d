"""Entry point for 'python -m teampulse'."""

from teampulse.cli import main

if __name__ == "__main__":
    main()
