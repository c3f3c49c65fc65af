"""
Allow running the package directly with `python -m ovh_async`.

Copyright (c) 2026 Snapp'
Author: Yannis Duvignau (yduvignau@snapp.fr)
"""

from ovh_async.cli import main

if __name__ == "__main__":
    main()
