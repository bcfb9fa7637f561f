"""
Email Parser Utility
Extracts the sender address, subject and links from raw email text
"""

import re
import logging
from typing import Dict, Any, List, Optional

from fraudscan.core.url_analyzer import parse_url

logger = logging.getLogger(__name__)


class EmailParser:
    """Pull the pieces the analyzers need out of pasted email text"""

    # Link pattern: scheme followed by a run of non-whitespace, non-quote characters
    URL_PATTERN = re.compile(
        r'https?://[^\s<>"\']+',
        re.IGNORECASE
    )

    # "From:" header, with an optional display name before an angle-bracketed address
    SENDER_PATTERN = re.compile(
        r'from:\s*(?:[^<>\n@]*<)?([^\s@<>"]+@[^\s@<>"]+\.[^\s@<>"]+)',
        re.IGNORECASE
    )

    SUBJECT_PATTERN = re.compile(r'^subject:\s*(.*)$', re.IGNORECASE | re.MULTILINE)

    def extract_sender(self, content: str) -> Optional[str]:
        """Return the lowercased sender address, or None if there is no From: line"""
        if not content:
            return None
        match = self.SENDER_PATTERN.search(content)
        if not match:
            return None
        return match.group(1).rstrip('>.,;:').lower()

    @staticmethod
    def sender_domain(sender: Optional[str]) -> str:
        """Domain part of a sender address ("" if missing)"""
        if not sender or '@' not in sender:
            return ""
        return sender.rsplit('@', 1)[1]

    def extract_links(self, content: str) -> List[str]:
        """
        Extract every http(s) link in order of appearance.

        Repeated links are kept: each occurrence is scored on its own.
        """
        if not content:
            return []
        links = []
        for url in self.URL_PATTERN.findall(content):
            # Remove trailing punctuation
            url = url.rstrip('.,;:!?)]')
            if url:
                links.append(url)
        return links

    @staticmethod
    def link_hostname(link: str) -> Optional[str]:
        """Hostname of a link, or None if it is malformed (same rules as website URLs)"""
        parsed = parse_url(link)
        if parsed is None:
            logger.debug(f"Unparseable link {link[:80]!r}")
            return None
        return parsed[1]

    def parse_text(self, content: str) -> Dict[str, Any]:
        """Summarize pasted email text for display alongside a result"""
        subject_match = self.SUBJECT_PATTERN.search(content or "")
        sender = self.extract_sender(content)
        links = self.extract_links(content)
        return {
            "sender": sender,
            "sender_domain": self.sender_domain(sender) or None,
            "subject": subject_match.group(1).strip() if subject_match else None,
            "links_count": len(links),
            "links": links[:10],
        }


# Singleton instance
_parser: Optional[EmailParser] = None


def get_email_parser() -> EmailParser:
    """Get or create email parser instance"""
    global _parser
    if _parser is None:
        _parser = EmailParser()
    return _parser
