"""External interfaces for the agentstory toolkit.

Key Components:
    - api: FastAPI validation and export service
    - cli: click command-line interface
"""

__all__ = []
