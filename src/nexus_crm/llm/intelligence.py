"""LLM-backed relationship intelligence with per-operation fallbacks."""

import json
import re
from typing import Any, List, Optional

import structlog

from ..contacts.eligibility import sync_handle
from ..contacts.models import Contact, SyncPlatform
from .chat_provider import ChatProvider
from .interface import (
    DEFAULT_FOLLOW_UP_DAYS,
    FALLBACK_DISCUSSION_TOPICS,
    FALLBACK_ICE_BREAKERS,
    NO_UPDATES_FOUND,
    NO_UPDATES_TODAY,
    EmailDraft,
    MeetingSummary,
    SocialUpdate,
)

logger = structlog.get_logger()

MAX_SUGGESTIONS = 3

JSON_SYSTEM = "You are a relationship assistant. Reply with a single JSON object only."

ICE_BREAKERS_PROMPT = """\
Suggest 3 personalised conversation starters for my contact {name}.

Info:
- Meeting context: {occasion}
- Tags: {tags}
- Role: {title} at {company}
- Personal details: {attributes}

Return JSON: {{"iceBreakers": ["...", "...", "..."]}}"""

TOPICS_PROMPT = """\
I am preparing for a meeting with {name}.
Suggest 3-5 specific discussion topics or follow-up questions.

Base them on:
1. Interaction history: {history}
2. General background: {notes}
3. Tags: {tags}
{social}
Look for open loops from earlier conversations, recent achievements or posts,
and personal interests.

Return JSON: {{"topics": ["...", "..."]}} with 3 to 5 concise bullet strings."""

EMAIL_PROMPT = """\
Draft a short email to {name}. Intent: {intent}.
Context: met at {occasion}. Tags: {tags}.

Return JSON: {{"subject": "...", "body": "..."}}"""

SUMMARY_PROMPT = """\
Summarise these meeting notes with {name}: "{notes}"

Return JSON: {{"summary": ["..."], "suggestedDateOffsetDays": <days until the next catch-up>}}"""

SOCIAL_UPDATE_PROMPT = """\
Search for public updates, posts or news on {platform} from the last 7 days for \
{name} ({title} at {company}, profile: {handle}).

Answer in exactly this format:
HAS_UPDATE: [YES or NO]
SUMMARY: [2-3 line summary of the latest activity. If HAS_UPDATE is NO, say "No updates today."]
SUGGESTIONS: [{addon} If HAS_UPDATE is NO, leave this empty.]

Be strict. If there is no specific post or change from the last week, set HAS_UPDATE to NO."""

DRAFT_REPLY_ADDON = "Provide a specific draft reply I can use to respond to this update."
FOLLOW_UP_ADDON = "Provide 1-2 brief actionable follow-up ideas."

_HAS_UPDATE_RE = re.compile(r"HAS_UPDATE:\s*(YES|NO)", re.I)
_SUMMARY_RE = re.compile(r"SUMMARY:\s*(.*?)(?=SUGGESTIONS:|$)", re.I | re.S)
_SUGGESTIONS_RE = re.compile(r"SUGGESTIONS:\s*(.*)$", re.I | re.S)
_BULLET_RE = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")


def parse_social_update(text: str, citations: Optional[List[str]] = None) -> SocialUpdate:
    """Parse the HAS_UPDATE / SUMMARY / SUGGESTIONS reply format."""
    has_update = False
    summary = NO_UPDATES_FOUND
    suggestions: List[str] = []

    match = _HAS_UPDATE_RE.search(text)
    if match:
        has_update = match.group(1).upper() == "YES"

    match = _SUMMARY_RE.search(text)
    if match:
        summary = match.group(1).strip()

    match = _SUGGESTIONS_RE.search(text)
    if match and has_update:
        # One suggestion per line, bullet markers stripped
        lines = (_BULLET_RE.sub("", line).strip() for line in match.group(1).splitlines())
        suggestions = [line for line in lines if line]

    sources = list(dict.fromkeys(citations or []))
    return SocialUpdate(
        has_update=has_update,
        summary=summary,
        suggestions=suggestions[:MAX_SUGGESTIONS],
        sources=sources,
    )


def _string_list(value: Any) -> Optional[List[str]]:
    """Return value as a list of non-blank strings, or None if malformed."""
    if not isinstance(value, list):
        return None
    return [str(item).strip() for item in value if str(item).strip()]


class IntelligenceService:
    """Relationship intelligence over an OpenAI-compatible chat provider.

    A missing provider (no credential configured) short-circuits every
    operation to its fallback without attempting a call. Social-update
    lookups run on the separate web-search provider.
    """

    def __init__(
        self,
        chat_provider: Optional[ChatProvider] = None,
        search_provider: Optional[ChatProvider] = None,
        follow_up_days: int = DEFAULT_FOLLOW_UP_DAYS,
    ) -> None:
        self._provider = chat_provider
        self._search_provider = search_provider
        self._follow_up_days = follow_up_days

    @property
    def is_configured(self) -> bool:
        return self._provider is not None

    @property
    def can_search(self) -> bool:
        return self._search_provider is not None

    async def _ask_json(self, prompt: str, operation: str) -> Optional[dict]:
        """Run a JSON prompt; None on any failure or non-object reply."""
        if not self._provider:
            return None

        try:
            raw = await self._provider.complete_json(prompt=prompt, system=JSON_SYSTEM)
            data = json.loads(raw.strip() or "{}")
        except (json.JSONDecodeError, TypeError) as exc:
            logger.warning("Malformed intelligence reply", operation=operation, error=str(exc))
            return None
        except Exception as exc:
            logger.error("Intelligence call failed", operation=operation, error=str(exc))
            return None

        if not isinstance(data, dict):
            logger.warning("Intelligence reply is not an object", operation=operation)
            return None
        return data

    async def fetch_social_update(self, contact: Contact) -> SocialUpdate:
        """Search the contact's sync platform for recent activity."""
        if contact.sync_platform is SyncPlatform.NONE:
            return SocialUpdate.fallback(NO_UPDATES_TODAY)
        if not self._search_provider:
            logger.debug("No web-search provider configured", contact_id=contact.id)
            return SocialUpdate.fallback()

        prompt = SOCIAL_UPDATE_PROMPT.format(
            platform=contact.sync_platform.value,
            name=contact.display_name,
            title=contact.title or "",
            company=contact.company or "",
            handle=sync_handle(contact) or "",
            addon=DRAFT_REPLY_ADDON if contact.generate_ai_responses else FOLLOW_UP_ADDON,
        )

        try:
            response = await self._search_provider.chat(
                messages=[{"role": "user", "content": prompt}],
                web_search=True,
            )
        except Exception as exc:
            logger.error(
                "Social update fetch failed",
                contact_id=contact.id,
                error=str(exc),
            )
            return SocialUpdate.fallback()

        update = parse_social_update(response.content, response.citations)
        logger.info(
            "Social update fetched",
            contact_id=contact.id,
            model=response.model,
            has_update=update.has_update,
            sources=len(update.sources),
            cost=round(response.cost, 6),
        )
        return update

    async def generate_ice_breakers(self, contact: Contact) -> List[str]:
        prompt = ICE_BREAKERS_PROMPT.format(
            name=contact.display_name,
            occasion=contact.occasion or "",
            tags=", ".join(contact.tags),
            title=contact.title or "",
            company=contact.company or "",
            attributes=", ".join(f"{a.label}: {a.value}" for a in contact.attributes),
        )
        data = await self._ask_json(prompt, "ice_breakers")
        if data is None:
            return list(FALLBACK_ICE_BREAKERS)
        return _string_list(data.get("iceBreakers")) or []

    async def generate_discussion_topics(
        self,
        contact: Contact,
        social_context: Optional[str] = None,
    ) -> List[str]:
        history = "\n---\n".join(
            f"Date: {i.display_date}\nNotes: {i.notes}" for i in contact.interactions
        )
        social = (
            f"4. Recent social media activity (use these insights): {social_context}\n"
            if social_context
            else ""
        )
        prompt = TOPICS_PROMPT.format(
            name=contact.display_name,
            history=history or "No previous meetings.",
            notes=contact.notes or "None.",
            tags=", ".join(contact.tags),
            social=social,
        )
        data = await self._ask_json(prompt, "discussion_topics")
        if data is None:
            return list(FALLBACK_DISCUSSION_TOPICS)
        return _string_list(data.get("topics")) or []

    async def draft_email(self, contact: Contact, intent: str) -> EmailDraft:
        prompt = EMAIL_PROMPT.format(
            name=contact.display_name,
            intent=intent,
            occasion=contact.occasion or "",
            tags=", ".join(contact.tags),
        )
        data = await self._ask_json(prompt, "draft_email")
        if data is None:
            return EmailDraft()
        fallback = EmailDraft()
        return EmailDraft(
            subject=str(data.get("subject") or fallback.subject),
            body=str(data.get("body") or fallback.body),
        )

    async def summarize_meeting(self, raw_notes: str, contact_name: str) -> MeetingSummary:
        prompt = SUMMARY_PROMPT.format(name=contact_name, notes=raw_notes)
        data = await self._ask_json(prompt, "summarize_meeting")
        if data is None:
            return MeetingSummary(suggested_date_offset_days=self._follow_up_days)

        summary = _string_list(data.get("summary")) or []
        offset = data.get("suggestedDateOffsetDays")
        try:
            offset_days = int(offset) if offset else self._follow_up_days
        except (TypeError, ValueError):
            offset_days = self._follow_up_days
        if offset_days <= 0:
            offset_days = self._follow_up_days

        return MeetingSummary(summary=summary, suggested_date_offset_days=offset_days)
