import json
import logging
import subprocess
import sys

logger = logging.getLogger(__name__)

TITLE = "MediaWiki watchlist"


def notification_command(message: str, title: str = TITLE) -> list[str]:
    if sys.platform == "darwin":
        # json.dumps yields a double-quoted string literal AppleScript accepts
        script = f"display notification {json.dumps(message)} with title {json.dumps(title)}"
        return ["osascript", "-e", script]
    return ["notify-send", title, message]


def notify(message: str, title: str = TITLE) -> bool:
    """Show a desktop notification. Returns False if none could be shown."""
    cmd = notification_command(message, title)
    try:
        subprocess.run(cmd, capture_output=True, text=True, check=True)
    except subprocess.CalledProcessError as e:
        logger.error(f"Notification command failed: {' '.join(cmd)}")
        logger.error(f"Error: {e.stderr}")
        return False
    except FileNotFoundError:
        logger.error(f"{cmd[0]} not found, could not show notification")
        return False
    return True
