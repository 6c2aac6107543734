#!/usr/bin/env python
"""
Backend runner for PaperDesk.

Serves the app factory with uvicorn; HOST/PORT override the defaults.
"""
import os

import uvicorn


def main() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))
    print(f"\n[INFO] Starting backend server on port {port}...")
    uvicorn.run("paperdesk.main:get_app", factory=True, host=host, port=port)


if __name__ == "__main__":
    main()
