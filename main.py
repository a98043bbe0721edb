"""
sample-app - Main Entry Point

Structured-logging users API for the ELK demo.

    python main.py
    uvicorn main:app --reload
"""

from sample_app.__main__ import main
from sample_app.api.main import app

__all__ = ["app", "main"]


if __name__ == "__main__":
    main()
