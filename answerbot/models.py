"""
Data model shared by the matcher, the command handlers and the storage layer.

Storage documents use camelCase field names; attributes here are snake_case.
"""
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class KnowledgeEntry:
    topic: str
    category: str
    question: str
    answer: str
    source: str | None = None
    tags: tuple[str, ...] = ()
    id: str | None = None

    @classmethod
    def from_doc(cls, doc: dict) -> "KnowledgeEntry":
        entry_id = doc.get("_id")
        return cls(
            topic=doc.get("topic", ""),
            category=doc.get("category", ""),
            question=doc.get("question", ""),
            answer=doc.get("answer", ""),
            source=doc.get("source") or None,
            tags=tuple(doc.get("tags") or ()),
            id=str(entry_id) if entry_id is not None else None,
        )

    def to_doc(self) -> dict:
        return {
            "topic": self.topic,
            "category": self.category,
            "question": self.question,
            "answer": self.answer,
            "source": self.source,
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class MatchResult:
    entry: KnowledgeEntry | None
    score: float


@dataclass(frozen=True)
class Conversation:
    user_id: str
    username: str
    channel: str
    query: str
    response: str
    timestamp: datetime

    @classmethod
    def from_doc(cls, doc: dict) -> "Conversation":
        return cls(
            user_id=doc["userId"],
            username=doc["username"],
            channel=doc.get("channel", ""),
            query=doc["query"],
            response=doc["response"],
            timestamp=doc["timestamp"],
        )

    def to_doc(self) -> dict:
        return {
            "userId": self.user_id,
            "username": self.username,
            "channel": self.channel,
            "query": self.query,
            "response": self.response,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class CommandDefinition:
    name: str
    description: str
    usage: str
    enabled: bool = True

    @classmethod
    def from_doc(cls, doc: dict) -> "CommandDefinition":
        return cls(
            name=doc["name"],
            description=doc.get("description", ""),
            usage=doc.get("usage", ""),
            enabled=bool(doc.get("enabled", True)),
        )


@dataclass(frozen=True)
class BotConfig:
    name: str = "Ahmadiyya Helper"
    command_prefix: str = "!"
    response_mode: str = "precise"
    response_timeout: int = 15
    max_response_length: str = "medium"
    include_citations: bool = True
    use_embeds: bool = True
    use_ai: bool = True
    respond_to_direct_messages: bool = True
    respond_to_mentions: bool = True

    # storage field name -> attribute name
    FIELDS = {
        "name": "name",
        "commandPrefix": "command_prefix",
        "responseMode": "response_mode",
        "responseTimeout": "response_timeout",
        "maxResponseLength": "max_response_length",
        "includeCitations": "include_citations",
        "useEmbeds": "use_embeds",
        "useAI": "use_ai",
        "respondToDirectMessages": "respond_to_direct_messages",
        "respondToMentions": "respond_to_mentions",
    }

    @classmethod
    def from_doc(cls, doc: dict) -> "BotConfig":
        values = {attr: doc[key] for key, attr in cls.FIELDS.items() if doc.get(key) is not None}
        return cls(**values)

    def to_doc(self) -> dict:
        return {key: getattr(self, attr) for key, attr in self.FIELDS.items()}
