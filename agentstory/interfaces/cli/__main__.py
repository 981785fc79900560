"""Entry point for running CLI as module.

Usage:
    python -m agentstory.interfaces.cli validate story.yaml
    python -m agentstory.interfaces.cli export story.yaml --adapter claude
"""

if __name__ == "__main__":
    from agentstory.interfaces.cli.app import main
    main()
