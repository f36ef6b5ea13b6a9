"""A server for just Modal Cloud docs from modal.com.

This is used as a way to test the doc functionality via MCP.
"""

# /usr/bin/env python3
from mcpdoc.main import DocSource, create_server

MODAL_SOURCES: list[DocSource] = [
    {
        "name": "Modal",
        "llms_txt": "https://modal.com/llms.txt",
        "description": "Modal Cloud documentation",
    }
]

server = create_server(MODAL_SOURCES, follow_redirects=False)


if __name__ == "__main__":
    server.run(transport="stdio")
