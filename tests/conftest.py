# FILE: tests/conftest.py
"""
Shared fixtures for the answerbot test suite.

Provides:
- InMemoryStorage: the storage interface backed by plain lists
- FakeGenerator: records prompts, returns a canned answer or raises
- FakeCollection: just enough of a pymongo collection for the rate limiter
  and MongoStorage
- make_ctx: builds a MessageContext whose replies are captured
"""
from __future__ import annotations

import itertools
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from answerbot import knowledge
from answerbot.context import BotServices, InboundMessage, MessageContext
from answerbot.models import BotConfig, CommandDefinition, KnowledgeEntry


FOUNDER = KnowledgeEntry(
    topic="Founder",
    category="History",
    question="Who was the founder of the Ahmadiyya Muslim Community?",
    answer="The community was founded by Mirza Ghulam Ahmad in 1889.",
    source="X",
    tags=("founder", "Mirza Ghulam Ahmad"),
    id="1",
)

KHILAFAT = KnowledgeEntry(
    topic="Khilafat",
    category="Beliefs",
    question="What is the Ahmadiyya belief about Khilafat?",
    answer="Khilafat is the institution of successorship.",
    source="The Review of Religions",
    tags=("khilafat", "khalifa"),
    id="2",
)

JIHAD = KnowledgeEntry(
    topic="Jihad",
    category="Beliefs",
    question="What is the Ahmadiyya perspective on Jihad?",
    answer="Jihad is primarily a peaceful struggle for self-reformation.",
    source=None,
    tags=("jihad", "peace"),
    id="3",
)

DEFAULT_COMMANDS = [
    CommandDefinition("help", "Show available commands", "help"),
    CommandDefinition("ask", "Ask a question", "ask [question]"),
    CommandDefinition("beliefs", "Explain beliefs on a topic", "beliefs [topic]"),
    CommandDefinition("history", "Learn about history", "history [topic]"),
    CommandDefinition("quote", "Get a random quote", "quote [optional category]"),
]


class InMemoryStorage:
    def __init__(self, entries=None, commands=None, config=None, channels=None):
        self.entries = list(entries if entries is not None else [FOUNDER, KHILAFAT, JIHAD])
        self.commands = list(commands if commands is not None else DEFAULT_COMMANDS)
        self.config = config or BotConfig(use_embeds=False)
        self.channels = set(channels or ())
        self.conversations = []
        self.config_reads = 0

    def get_bot_config(self):
        self.config_reads += 1
        return self.config

    def get_knowledge_base_entries(self):
        return list(self.entries)

    def get_knowledge_base_entries_by_topic(self, topic):
        return knowledge.get_entries_by_topic(self.entries, topic)

    def get_knowledge_base_entries_by_category(self, category):
        return knowledge.get_entries_by_category(self.entries, category)

    def search_knowledge_base(self, query):
        return knowledge.search_knowledge_base(self.entries, query)

    def get_commands(self):
        return list(self.commands)

    def get_command_by_name(self, name):
        for command in self.commands:
            if command.name.lower() == name.lower():
                return command
        return None

    def get_authorized_channels(self):
        return set(self.channels)

    def add_conversation(self, conversation):
        self.conversations.append(conversation)


class FakeGenerator:
    def __init__(self, answer="Generated answer.", error=None):
        self.answer = answer
        self.error = error
        self.calls = []

    def generate(self, prompt, **kwargs):
        self.calls.append((prompt, kwargs))
        if self.error is not None:
            raise self.error
        return self.answer


class FakeCursor(list):
    def sort(self, key, direction=1):
        return FakeCursor(sorted(self, key=lambda doc: doc.get(key), reverse=direction == -1))

    def limit(self, count):
        return FakeCursor(self[:count])


class FakeCollection:
    """Equality filters, insert and $set updates; documents get increasing int ids."""

    _ids = itertools.count(1)

    def __init__(self, docs=None):
        self.docs = []
        for doc in docs or ():
            self.insert_one(doc)

    @staticmethod
    def _matches(doc, query):
        return all(doc.get(key) == value for key, value in query.items())

    def find(self, query=None):
        return FakeCursor(dict(doc) for doc in self.docs if self._matches(doc, query or {}))

    def find_one(self, query=None):
        for doc in self.docs:
            if self._matches(doc, query or {}):
                return dict(doc)
        return None

    def insert_one(self, doc):
        doc.setdefault("_id", next(self._ids))
        self.docs.append(dict(doc))

    def insert_many(self, docs):
        for doc in docs:
            self.insert_one(doc)

    def update_one(self, query, update, upsert=False):
        for doc in self.docs:
            if self._matches(doc, query):
                doc.update(update.get("$set", {}))
                return
        if upsert:
            self.insert_one({**query, **update.get("$set", {})})


class FakeDatabase(dict):
    def __missing__(self, name):
        collection = self[name] = FakeCollection()
        return collection


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def make_ctx(storage, generator):
    """Build a MessageContext; returns (ctx, replies)."""

    def _make(text, *, is_direct=False, mentions_bot=False, channel_id="C123",
              storage_override=None, generator_override=None, rate_limiter=None, bot_user_id="UBOT"):
        replies = []
        services = BotServices(
            storage=storage_override or storage,
            generator=generator_override or generator,
            rate_limiter=rate_limiter,
            bot_user_id=bot_user_id,
        )
        message = InboundMessage(
            text=text,
            sender_id="U42",
            sender_name="amina",
            channel_id=channel_id,
            is_direct=is_direct,
            mentions_bot=mentions_bot,
        )
        return MessageContext(message=message, services=services, reply=replies.append), replies

    return _make
