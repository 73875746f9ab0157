#!/usr/bin/env python3

from ais_replay.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
