import logging
from dataclasses import dataclass
from typing import Iterator, Optional

import requests

logger = logging.getLogger(__name__)

REDDIT_LISTING_URL = "https://www.reddit.com/r/{topic}/top.json"


@dataclass(frozen=True)
class Document:
    title: str
    body: str
    url: str


class RedditFetcher:
    """
    Reads the top posts of a subreddit as prompt-sized documents.

    Failures are soft: an unreachable listing, a non-2xx answer, or an
    unexpected body all produce an empty sequence, never an exception.
    """

    def __init__(
        self,
        user_agent: str,
        max_documents: int = 5,
        max_body_chars: int = 1000,
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ):
        self.user_agent = user_agent
        self.max_documents = max_documents
        self.max_body_chars = max_body_chars
        self.timeout = timeout
        self.session = session or requests.Session()

    def _listing(self, topic: str) -> list:
        response = self.session.get(
            REDDIT_LISTING_URL.format(topic=topic),
            params={"limit": 25, "t": "month"},
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()["data"]["children"]

    def fetch(self, topic: str) -> Iterator[Document]:
        """Yield at most `max_documents` qualifying posts for `topic`."""
        try:
            children = self._listing(topic)
        except requests.exceptions.RequestException as e:
            logger.warning(f"r/{topic} unreachable: {e}")
            return
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"r/{topic} returned an unexpected listing: {e}")
            return

        yielded = 0
        for child in children:
            if yielded >= self.max_documents:
                break
            post = child.get("data", {}) if isinstance(child, dict) else {}
            body = (post.get("selftext") or "").strip()
            if post.get("stickied") or not body:
                continue
            permalink = post.get("permalink", "")
            yield Document(
                title=post.get("title", "").strip(),
                body=body[:self.max_body_chars],
                url=f"https://reddit.com{permalink}" if permalink else f"https://reddit.com/r/{topic}",
            )
            yielded += 1

        if not yielded:
            logger.info(f"r/{topic} returned no qualifying posts")
