from atlas.cli import main as _cli_main

__all__ = ["main"]


def main() -> None:
    """Compatibility wrapper that delegates to `atlas.cli.main`."""
    _cli_main()


if __name__ == "__main__":
    main()
