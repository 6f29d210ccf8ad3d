"""
Main entry point for the Anonymous Chat Telegram Bot.

This module connects to the MongoDB profile store, builds the chat engine,
sets up handlers and starts the polling loop.
"""

import asyncio
import logging
import os
import sys

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.types import BotCommand, BotCommandScopeDefault

from config.settings import settings
from database.mongodb import init_db, get_db, close_db
from database.profiles import MongoProfileGateway
from engine import ChatEngine, run_matchmaking_worker
from handlers import start, chat, system
from middlewares.guard import InvariantGuardMiddleware
from utils.transport import BotTransport


# Configure logging
os.makedirs(os.path.dirname(settings.LOG_FILE) or ".", exist_ok=True)
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler(settings.LOG_FILE, encoding='utf-8')
    ]
)

logger = logging.getLogger(__name__)


async def on_startup(bot: Bot, dispatcher: Dispatcher, engine: ChatEngine) -> None:
    """
    Execute actions on bot startup.

    Args:
        bot: Bot instance
        dispatcher: Dispatcher instance
        engine: Chat engine
    """
    commands = [
        BotCommand(command="start", description="Start the bot"),
        BotCommand(command="search", description="Find a chat partner"),
        BotCommand(command="cancel", description="Stop searching"),
        BotCommand(command="end", description="End current chat"),
        BotCommand(command="help", description="Show help message"),
    ]

    await bot.set_my_commands(commands, scope=BotCommandScopeDefault())

    if settings.MATCH_SWEEP_INTERVAL_SECONDS > 0:
        dispatcher["matchmaking_task"] = asyncio.create_task(
            run_matchmaking_worker(engine, settings.MATCH_SWEEP_INTERVAL_SECONDS)
        )

    bot_info = await bot.get_me()
    logger.info(f"Bot started: @{bot_info.username}")


async def on_shutdown(dispatcher: Dispatcher) -> None:
    """
    Execute actions on bot shutdown.

    Args:
        dispatcher: Dispatcher instance
    """
    logger.info("Shutting down bot...")

    task = dispatcher.workflow_data.get("matchmaking_task")
    if task:
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    # Close database connection
    await close_db()
    logger.info("Bot stopped")


async def main() -> None:
    """Main function to start the bot."""
    logger.info("Starting Anonymous Chat Bot...")

    await init_db()
    logger.info("Database connected successfully")

    # Initialize bot and dispatcher
    bot = Bot(
        token=settings.BOT_TOKEN,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML)
    )

    dp = Dispatcher()
    dp["engine"] = ChatEngine(
        profiles=MongoProfileGateway(get_db()[settings.PROFILES_COLLECTION]),
        transport=BotTransport(bot)
    )

    # Register middlewares
    dp.message.middleware(InvariantGuardMiddleware())
    dp.my_chat_member.middleware(InvariantGuardMiddleware())

    # Register routers
    dp.include_router(start.router)
    dp.include_router(system.router)
    dp.include_router(chat.router)

    # Register startup and shutdown handlers
    dp.startup.register(on_startup)
    dp.shutdown.register(on_shutdown)

    try:
        # Start polling
        logger.info("Starting polling...")
        await dp.start_polling(
            bot,
            allowed_updates=dp.resolve_used_update_types()
        )
    except Exception as e:
        logger.error(f"Error during polling: {e}", exc_info=True)
    finally:
        await bot.session.close()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
    except Exception as e:
        logger.critical(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)
