"""Entry point for ``python -m agentstory``."""

if __name__ == "__main__":
    from agentstory.interfaces.cli.app import main
    main()
