import os

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from slack_bolt import App
from slack_bolt.adapter.fastapi import SlackRequestHandler
from slack_sdk.errors import SlackApiError

from answerbot.logger import logger
from answerbot.config import validate_environment_variables
from answerbot.ai import OpenAIGenerator
from answerbot.context import BotServices, InboundMessage, MessageContext
from answerbot.messages import process_message
from answerbot.rate_limiter import create_ai_rate_limiter
from answerbot.utils import mentions_user

# Validate environment variables at startup
validate_environment_variables()

from answerbot.db import db, rate_limits  # noqa: E402 - needs MONGO_URL validated first
from answerbot.storage import MongoStorage  # noqa: E402

# Slack app setup
slack_app = App(
    token=os.environ["SLACK_BOT_TOKEN"],
    signing_secret=os.environ["SLACK_SIGNING_SECRET"],
    # Ensure Slack gets an ACK within 3 seconds even if processing is longer
    process_before_response=True,
)

fastapi_app = FastAPI()
handler = SlackRequestHandler(slack_app)

services = BotServices(
    storage=MongoStorage(db),
    generator=OpenAIGenerator(),
    rate_limiter=create_ai_rate_limiter(rate_limits),
)


def _resolve_username(client, user_id: str) -> str:
    try:
        user = client.users_info(user=user_id)["user"]
        return user.get("profile", {}).get("display_name") or user.get("real_name") or user.get("name") or user_id
    except SlackApiError as e:
        logger.warning("Could not resolve username for user_id=%s: %s", user_id, e)
        return user_id


def _make_reply(say, event):
    thread_ts = event.get("thread_ts")

    def reply(content):
        if isinstance(content, dict):
            say(**content, thread_ts=thread_ts)
        else:
            say(text=content, thread_ts=thread_ts)

    return reply


@slack_app.event("message")
def handle_message(event, say, client, context):
    # Ignore bots (including ourselves) and edits/deletions
    if event.get("bot_id") or event.get("subtype"):
        return

    user_id = event.get("user")
    if not user_id:
        return

    bot_user_id = context.get("bot_user_id")
    if services.bot_user_id is None and bot_user_id:
        services.bot_user_id = bot_user_id

    text = event.get("text", "") or ""
    message = InboundMessage(
        text=text,
        sender_id=user_id,
        sender_name=_resolve_username(client, user_id),
        channel_id=event.get("channel"),
        is_direct=event.get("channel_type") == "im",
        mentions_bot=mentions_user(text, bot_user_id),
    )
    ctx = MessageContext(message=message, services=services, reply=_make_reply(say, event))

    try:
        process_message(ctx)
    except Exception:
        logger.exception("Error processing message from user_id=%s", user_id)


@slack_app.event("app_mention")
def handle_mention(event):
    # Mentions also arrive as "message" events and are answered there
    logger.debug("app_mention in channel=%s", event.get("channel"))


@fastapi_app.post("/slack/events")
async def slack_events(request: Request):
    try:
        await request.json()
    except Exception:
        raise HTTPException(status_code=400, detail="No JSON received")

    # Delegate to Slack Bolt FastAPI handler
    return await handler.handle(request)


@fastapi_app.get("/")
async def ping():
    return JSONResponse({"status": "ok"})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app:fastapi_app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 3000)),
        reload=os.getenv("ENV") != "prod",
    )
