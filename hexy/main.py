"""Terminal entry point for the Hexy chat client.

Logs in (or reuses the stored session) and runs a line based chat loop.
Environment variables are loaded from .env file.
"""

import asyncio
import getpass
import logging
import os
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

# Load environment variables before any other imports that might need them
load_dotenv()

from hexy.auth.account import AccountService, LoginValidationError  # noqa: E402
from hexy.auth.session import AuthSession  # noqa: E402
from hexy.auth.store import FileCredentialStore  # noqa: E402
from hexy.chat.session import ChatSession  # noqa: E402
from hexy.chat.sidebar import split_pinned  # noqa: E402
from hexy.client.api_client import HexyClient  # noqa: E402
from hexy.client.config import get_client_config  # noqa: E402
from hexy.client.errors import ApiError  # noqa: E402

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "WARNING").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  /new            start a new conversation
  /chats [query]  list conversations, pinned first
  /open <id>      open a conversation
  /delete <id>    delete a conversation
  /models         list available models
  /model <value>  switch model
  /logout         forget the stored session and exit
  /quit           exit"""


async def ensure_login(accounts: AccountService) -> bool:
    """Reuse the stored session or prompt for credentials."""
    try:
        user = await accounts.restore_session()
    except ApiError as e:
        print(f"Could not restore session: {e}")
        return False
    if user is not None:
        print(f"Signed in as {user.username}")
        return True

    username = os.getenv("HEXY_USERNAME") or input("Username: ")
    password = os.getenv("HEXY_PASSWORD") or getpass.getpass("Password: ")
    try:
        await accounts.login(username, password)
    except (ApiError, LoginValidationError) as e:
        print(f"Login failed: {e}")
        return False
    return True


async def handle_command(line: str, chat: ChatSession, accounts: AccountService) -> bool:
    """Run a slash command. Returns False when the loop should stop."""
    command, _, arg = line.partition(" ")
    arg = arg.strip()

    if command == "/quit":
        return False
    if command == "/logout":
        await accounts.logout()
        return False
    if command == "/new":
        chat.new_chat()
        print("Started a new conversation")
    elif command == "/chats":
        pinned, regular = split_pinned(await chat.list_chats(arg))
        if not pinned and not regular:
            print("No conversations" + (f" matching '{arg}'" if arg else ""))
        for conversation in pinned + regular:
            marker = "*" if conversation.is_pinned else " "
            print(f" {marker} {conversation.identifier}  {conversation.title or 'New Chat'}")
            print(f"      {conversation.preview}")
    elif command == "/open" and arg:
        await chat.select_chat(arg)
        try:
            transcript = chat.transcript()
        except ValidationError as e:
            logger.warning(f"Unexpected history format: {e}")
            transcript = []
        for message in transcript:
            print(f"[{message.message_role.value}] {message.content}")
    elif command == "/delete" and arg:
        print("Deleted" if await chat.delete_chat(arg) else "Delete failed")
    elif command == "/models":
        await chat.load_models()
        if chat.model_error:
            print(chat.model_error)
        for option in chat.model_options:
            marker = "*" if option.value == chat.selected_model else " "
            print(f" {marker} {option.value}  ({option.label}, {option.tier})")
    elif command == "/model" and arg:
        try:
            chat.select_model(arg)
        except ValueError as e:
            print(e)
    else:
        print(HELP_TEXT)
    return True


async def run_chat() -> int:
    config = get_client_config()
    session = AuthSession(FileCredentialStore(config.credentials_path))

    async with HexyClient(config=config, session=session) as client:
        accounts = AccountService(client)
        if not await ensure_login(accounts):
            return 1

        chat = ChatSession(client)
        print("Type a message, or /help for commands.")
        while True:
            try:
                line = input(f"{chat.selected_model_label}> ").strip()
            except (EOFError, KeyboardInterrupt):
                print()
                break
            if not line:
                continue
            if line.startswith("/"):
                if not await handle_command(line, chat, accounts):
                    break
                continue
            if await chat.send(line):
                print(chat.messages[-1]["content"] or "_No content returned_")
            else:
                print(chat.last_error)
    return 0


def main() -> None:
    """Application entry point."""
    logger.info("Starting Hexy chat client")
    sys.exit(asyncio.run(run_chat()))


if __name__ == "__main__":
    main()
