#!/usr/bin/env python
"""Development server entrypoint for the trade journal."""

from tradejournal import create_app

if __name__ == "__main__":
    app = create_app("development")
    app.run(port=3000)
