import json
import logging
import os
import sys

# Ensure repo root is on sys.path so `sitecrawl` package imports resolve when
# running the script directly.
ROOT = os.path.dirname(os.path.dirname(__file__))
sys.path.insert(0, ROOT)

from sitecrawl.container import Container
from sitecrawl.domain.crawl_request import CrawlRequest


logging.basicConfig(level=logging.INFO)


def main(argv):
    if not argv:
        print("usage: crawl_local.py URL [DEPTH] [MAX_PAGES]", file=sys.stderr)
        return 2
    depth = int(argv[1]) if len(argv) > 1 else 2
    max_pages = int(argv[2]) if len(argv) > 2 else 10
    request = CrawlRequest.create(
        argv[0],
        depth=depth,
        max_pages=max_pages,
        extract_content=True,
        follow_navigation=True,
    )

    result = Container().crawl_executor().crawl(request)
    print(json.dumps(result.to_dict(max_content_chars=200), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
