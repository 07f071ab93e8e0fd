import os
import logging
from pathlib import Path

try:
	from dotenv import load_dotenv
except ImportError:
	logging.warning("python-dotenv not available; using environment variables only")
else:
	loaded = load_dotenv()
	if not loaded and Path(".env").exists():
		raise RuntimeError(".env file present but failed to load")

# Hard ceilings applied to every crawl request.
MAX_DEPTH = 5
MAX_PAGES = 100

DEFAULT_USER_AGENT = "SiteCrawl/0.1"
DEFAULT_MAX_CHILDREN_PER_NODE = 2


def get_str_env(name: str, default: str) -> str:
	raw = os.getenv(name)
	if raw is None:
		return default
	return raw


def get_int_env(name: str, default: int) -> int:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return int(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def log_level() -> str:
	return (os.getenv("LOG_LEVEL", "INFO") or "INFO").strip().upper()
