#!/usr/bin/env python3
from shapecanvas.__main__ import main

if __name__ == "__main__":
    main()
