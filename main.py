#!/usr/bin/env python3
"""Static Uploader - エントリーポイント"""
import sys

from static_uploader.cli import main


if __name__ == "__main__":
    sys.exit(main())
