import sys


def log(tag, msg):
    print(f"[{tag}] {msg}", flush=True)


def log_error(tag, msg):
    print(f"[{tag}] {msg}", file=sys.stderr, flush=True)
