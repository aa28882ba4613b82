"""Allow ``python -m commit_it``."""

from commit_it.cli.main import main

if __name__ == "__main__":
    main(prog_name="commit-it")
