"""Allow running the updater with ``python -m netlify_ddns``."""

from netlify_ddns.cli import main

if __name__ == "__main__":
    main()
