"""
Entry point for: python -m restxls

The server communicates with editors via stdin/stdout using JSON-RPC.
"""
from restxls.main import main

if __name__ == "__main__":
    main()
