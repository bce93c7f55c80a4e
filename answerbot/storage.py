"""
MongoDB-backed storage used by the command handlers and the message path.

Collections:
    bot_config           single document with the live bot configuration
    commands             CommandDefinition documents
    knowledge_base       KnowledgeEntry documents
    authorized_channels  channels where the bot answers every message
    conversations        append-only log of answered queries

Empty config, command and knowledge collections are seeded with defaults on
first read.
"""
import copy

from pymongo import ASCENDING

from answerbot import knowledge
from answerbot.logger import logger
from answerbot.models import BotConfig, CommandDefinition, Conversation, KnowledgeEntry
from answerbot.seed import DEFAULT_BOT_CONFIG, DEFAULT_COMMANDS, DEFAULT_KNOWLEDGE_BASE


class MongoStorage:
    def __init__(self, db):
        self.bot_config = db["bot_config"]
        self.commands = db["commands"]
        self.knowledge_base = db["knowledge_base"]
        self.authorized_channels = db["authorized_channels"]
        self.conversations = db["conversations"]

    # Bot config

    def get_bot_config(self) -> BotConfig:
        doc = self.bot_config.find_one({})
        if not doc:
            logger.info("No bot config found, creating default config")
            doc = copy.deepcopy(DEFAULT_BOT_CONFIG)
            self.bot_config.insert_one(doc)
        return BotConfig.from_doc(doc)

    # Commands

    def get_commands(self) -> list[CommandDefinition]:
        docs = list(self.commands.find({}).sort("_id", ASCENDING))
        if not docs:
            logger.info("No commands found, creating default commands")
            self.commands.insert_many(copy.deepcopy(DEFAULT_COMMANDS))
            docs = list(self.commands.find({}).sort("_id", ASCENDING))
        return [CommandDefinition.from_doc(doc) for doc in docs]

    def get_command_by_name(self, name: str) -> CommandDefinition | None:
        lowered = (name or "").lower()
        for command in self.get_commands():
            if command.name.lower() == lowered:
                return command
        return None

    # Knowledge base

    def get_knowledge_base_entries(self) -> list[KnowledgeEntry]:
        """All entries in insertion order."""
        docs = list(self.knowledge_base.find({}).sort("_id", ASCENDING))
        if not docs:
            logger.info("Knowledge base is empty, seeding default entries")
            self.knowledge_base.insert_many(copy.deepcopy(DEFAULT_KNOWLEDGE_BASE))
            docs = list(self.knowledge_base.find({}).sort("_id", ASCENDING))
        return [KnowledgeEntry.from_doc(doc) for doc in docs]

    def get_knowledge_base_entries_by_topic(self, topic: str) -> list[KnowledgeEntry]:
        return knowledge.get_entries_by_topic(self.get_knowledge_base_entries(), topic)

    def get_knowledge_base_entries_by_category(self, category: str) -> list[KnowledgeEntry]:
        return knowledge.get_entries_by_category(self.get_knowledge_base_entries(), category)

    def search_knowledge_base(self, query: str) -> list[KnowledgeEntry]:
        return knowledge.search_knowledge_base(self.get_knowledge_base_entries(), query)

    # Channels

    def get_authorized_channels(self) -> set[str]:
        return {doc["channelId"] for doc in self.authorized_channels.find({}) if doc.get("channelId")}

    # Conversations

    def add_conversation(self, conversation: Conversation) -> None:
        self.conversations.insert_one(conversation.to_doc())

    def get_conversations(self, limit: int = 50) -> list[Conversation]:
        docs = self.conversations.find({}).sort("timestamp", -1).limit(limit)
        return [Conversation.from_doc(doc) for doc in docs]
