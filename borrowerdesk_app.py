"""Launcher used as the Nuitka entry point."""
from borrowerdesk.main import main

if __name__ == "__main__":
    main()
