import argparse
import logging

from core.config import AI_DELAY
from ui.app_ui import build_app

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Gomoku: play five-in-a-row against the computer.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=7860)
    parser.add_argument("--ai-delay", type=float, default=AI_DELAY,
                        help="seconds before the computer replies")
    parser.add_argument("--seed", type=int, default=None, help="seed for the computer's random moves")
    parser.add_argument("--theme", choices=["wood", "light"], default="wood")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)

def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    demo = build_app(ai_delay=args.ai_delay, seed=args.seed, theme=args.theme)
    demo.queue().launch(server_name=args.host, server_port=args.port)

if __name__ == "__main__":
    main()
