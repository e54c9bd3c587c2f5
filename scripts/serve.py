import argparse

import uvicorn

from cncvlo import __version__


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="CNC VLO repository")
    parser.add_argument("action", choices=["start", "version"])
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    if args.action == "version":
        print(f"cnc-vlo {__version__}")
        return 0
    uvicorn.run("cncvlo.main:app", host=args.host, port=args.port, log_config=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
