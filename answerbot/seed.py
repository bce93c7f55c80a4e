"""
Default documents written on first use of an empty database.
"""
from answerbot.models import BotConfig

DEFAULT_BOT_CONFIG = {
    **BotConfig().to_doc(),
    "description": "A Slack bot that answers questions about Ahmadiyya beliefs, history, and teachings.",
}

# Usage strings are rendered after the configured command prefix.
DEFAULT_COMMANDS = [
    {
        "name": "ask",
        "description": "Ask a question about Ahmadiyya",
        "usage": "ask [question]",
        "enabled": True,
    },
    {
        "name": "quote",
        "description": "Get a random quote from Ahmadiyya texts",
        "usage": "quote [optional category]",
        "enabled": True,
    },
    {
        "name": "history",
        "description": "Learn about Ahmadiyya history",
        "usage": "history [topic]",
        "enabled": True,
    },
    {
        "name": "beliefs",
        "description": "Explain Ahmadiyya beliefs on a topic",
        "usage": "beliefs [topic]",
        "enabled": True,
    },
    {
        "name": "help",
        "description": "Show available commands",
        "usage": "help",
        "enabled": True,
    },
]

DEFAULT_KNOWLEDGE_BASE = [
    {
        "topic": "Founder",
        "category": "History",
        "question": "Who was the founder of the Ahmadiyya Muslim Community?",
        "answer": (
            "The Ahmadiyya Muslim Community was founded by Mirza Ghulam Ahmad (1835-1908) in 1889 "
            "in Qadian, India. He claimed to be the promised Messiah and Mahdi awaited by Muslims, "
            "as well as the metaphorical second coming of Jesus Christ awaited by Christians and "
            "the manifestation of Krishna for Hindus."
        ),
        "source": "\"Invitation to Ahmadiyyat\" by Mirza Bashir-ud-Din Mahmud Ahmad, p.15-17",
        "tags": ["founder", "Mirza Ghulam Ahmad", "Promised Messiah", "Mahdi", "history"],
    },
    {
        "topic": "Khilafat",
        "category": "Beliefs",
        "question": "What is the Ahmadiyya belief about Khilafat?",
        "answer": (
            "In Ahmadiyya Islam, Khilafat refers to the spiritual institution of successorship that "
            "began after the death of Mirza Ghulam Ahmad in 1908. The Khalifa (successor) is believed "
            "to be divinely guided and serves as the spiritual and administrative head of the "
            "community. The successor is chosen by an electoral college. Currently, the fifth "
            "Khalifa, Mirza Masroor Ahmad, leads the community since 2003."
        ),
        "source": "\"The Institution of Khilafat\" published by The Review of Religions, 2008",
        "tags": ["khilafat", "khalifa", "successorship", "leadership", "beliefs"],
    },
    {
        "topic": "Jesus",
        "category": "Beliefs",
        "question": "What do Ahmadis believe about Jesus?",
        "answer": (
            "Ahmadiyya Muslims believe that Jesus (Isa) did not die on the cross but survived the "
            "crucifixion and migrated to Kashmir, India, where he continued his mission to the lost "
            "tribes of Israel and eventually died a natural death at an old age. They believe his "
            "tomb is located at the Roza Bal shrine in Srinagar, Kashmir."
        ),
        "source": "\"Jesus in India\" by Mirza Ghulam Ahmad",
        "tags": ["Jesus", "Isa", "crucifixion", "kashmir", "survival", "beliefs"],
    },
    {
        "topic": "Finality of Prophethood",
        "category": "Beliefs",
        "question": "What is the Ahmadiyya view on the finality of prophethood?",
        "answer": (
            "Ahmadiyya Muslims believe that Muhammad is the Seal of the Prophets (Khatam an-Nabiyyin) "
            "and no new law-bearing prophet can come after him. They distinguish between law-bearing "
            "and non-law-bearing prophets, and consider Mirza Ghulam Ahmad a non-law-bearing prophet "
            "who came in complete submission to the Prophet Muhammad and his teachings."
        ),
        "source": "\"The Essence of Islam, Vol. IV\" by Mirza Ghulam Ahmad",
        "tags": ["prophethood", "khatam", "Muhammad", "seal", "beliefs"],
    },
    {
        "topic": "Jihad",
        "category": "Beliefs",
        "question": "What is the Ahmadiyya perspective on Jihad?",
        "answer": (
            "Ahmadiyya Muslims interpret Jihad primarily as a peaceful struggle for self-reformation "
            "and spreading Islam through argumentation and rational discourse. They emphasize "
            "'Jihad of the Pen' over 'Jihad of the Sword' and categorically reject terrorism and "
            "violent extremism as having no place in Islamic teachings."
        ),
        "source": "\"The True Islamic Concept of Jihad\" by Mirza Tahir Ahmad",
        "tags": ["jihad", "peace", "non-violence", "beliefs"],
    },
]
