"""Entry point for 'python -m codecollab' command."""

from codecollab.cli import main

if __name__ == "__main__":
    main()
