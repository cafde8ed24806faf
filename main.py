#!/usr/bin/env python3
import uvicorn
import os
import sys

from colorama import init, Fore, Style

# Ensure project root is in path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

brightgreen = Style.BRIGHT + Fore.GREEN
brightblue = Style.BRIGHT + Fore.BLUE

if __name__ == "__main__":
    init(autoreset=True)
    from FileServer import config

    print(brightgreen + "=== CloudFiles Server ===")
    print(brightblue + f"[*] Listening on {config.HOST}:{config.PORT}")
    print(brightblue + f"[*] Data directory: {config.DATA_DIR}")
    print(brightgreen + "=========================")
    uvicorn.run("FileServer.main:app", host=config.HOST, port=config.PORT, reload=False)
