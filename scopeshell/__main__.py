#!/usr/bin/env python3
# scopeshell/__main__.py
from scopeshell.main import main

if __name__ == "__main__":
    raise SystemExit(main())
