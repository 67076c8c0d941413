"""
Pantry Chef - Prompt Logger.

Writes every Gemini prompt and raw reply to a markdown file for debugging
reply-parsing problems. Enabled via PANTRY_LOG_PROMPTS=1 or the
--log-prompts CLI flag.
"""

import os
from datetime import datetime
from pathlib import Path

# Configuration
LOG_PROMPTS = os.getenv("PANTRY_LOG_PROMPTS", "0") == "1"
LOG_DIR = Path("prompt_logs")

# Session tracking
_session_id: str | None = None
_call_counter: int = 0


def enable_prompt_logging(enabled: bool = True) -> None:
    """Enable or disable prompt logging."""
    global LOG_PROMPTS
    LOG_PROMPTS = enabled
    if enabled:
        _ensure_log_dir()


def is_enabled() -> bool:
    return LOG_PROMPTS


def _ensure_log_dir() -> None:
    LOG_DIR.mkdir(exist_ok=True)


def _get_session_id() -> str:
    global _session_id
    if _session_id is None:
        _session_id = datetime.now().strftime("%Y%m%d_%H%M%S")
    return _session_id


def _get_session_dir() -> Path:
    session_dir = LOG_DIR / _get_session_id()
    session_dir.mkdir(parents=True, exist_ok=True)
    return session_dir


def log_prompt(
    *,
    kind: str,
    model: str,
    prompt: str,
    response: str | None = None,
    error: str | None = None,
    status_code: int | None = None,
) -> Path | None:
    """
    Log a prompt and its raw reply to a file.

    Args:
        kind: What the call was for (recipe, tips, substitutions, question, ping)
        model: Gemini model name
        prompt: The full prompt text
        response: Raw reply text, if any
        error: Error description, if the call failed
        status_code: HTTP status of the reply, if one arrived

    Returns:
        Path to the log file, or None if logging is disabled
    """
    if not LOG_PROMPTS:
        return None

    global _call_counter
    _call_counter += 1

    _ensure_log_dir()
    filepath = _get_session_dir() / f"{_call_counter:02d}_{kind}.md"

    status_str = f"\n**Status:** {status_code}" if status_code is not None else ""
    content = f"""# Gemini Call: {kind}

**Time:** {datetime.now().isoformat()}
**Model:** {model}{status_str}

---

## Prompt

```
{prompt}
```

---

## Response

"""

    if error:
        content += f"**ERROR:** {error}\n"
    elif response is not None:
        content += f"```\n{response}\n```\n"
    else:
        content += "(No response yet)\n"

    filepath.write_text(content, encoding="utf-8")

    return filepath


def get_session_log_dir() -> Path | None:
    """Get the current session's log directory, if logging is enabled."""
    if not LOG_PROMPTS:
        return None
    return _get_session_dir()


def reset_session() -> None:
    """Reset the session (for testing or new conversation)."""
    global _session_id, _call_counter
    _session_id = None
    _call_counter = 0
