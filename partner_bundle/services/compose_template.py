"""Compose-file templating for the partner bundle.

The partner configures initial agents through four environment variables.
The shipped compose file may carry literal defaults for them; those are
replaced with ``${VAR}`` references so the partner's ``.env`` wins.
"""
import logging
import re
from pathlib import Path

from partner_bundle.services import fileops

logger = logging.getLogger(__name__)

AGENT_ENV_KEYS = (
    "INITIAL_AGENT_NAMES",
    "INITIAL_AGENT_URLS",
    "INITIAL_AGENT_MODELS",
    "INITIAL_AGENT_API_KEYS",
)

ENV_SAMPLE = """\
#
# single agent example
#
#INITIAL_AGENT_NAMES=openai_gpt
#INITIAL_AGENT_URLS=https://api.openai.com
#INITIAL_AGENT_MODELS=openai:gpt-4-1106-preview
#INITIAL_AGENT_API_KEYS=sk-abc
#
# multi agent example
#
#INITIAL_AGENT_NAMES=openai_gpt,openai_gpt_vision
#INITIAL_AGENT_URLS=https://api.openai.com,https://api.openai.com
#INITIAL_AGENT_MODELS=openai:gpt-4-1106-preview,openai:gpt-4-vision-preview
#INITIAL_AGENT_API_KEYS=sk-abc,sk-abc
#
# default none
#
INITIAL_AGENT_NAMES=
INITIAL_AGENT_URLS=
INITIAL_AGENT_MODELS=
INITIAL_AGENT_API_KEYS=
"""


def rewrite_agent_keys(text: str, keys=AGENT_ENV_KEYS) -> str:
    """Point every ``KEY=<value>`` at ``${KEY}``.

    Whatever follows ``KEY=`` up to the end of the line is replaced; anything
    before the key (indentation, ``- `` list markers) is kept. A key with no
    matching line is left alone.
    """
    for key in keys:
        # Only the tail of the matching line changes
        pattern = re.compile(rf"{re.escape(key)}=[^\r\n]*")
        replacement = f"{key}=${{{key}}}"
        text, count = pattern.subn(lambda _m, r=replacement: r, text)
        if count == 0:
            logger.debug("No %s assignment found, leaving compose file as is", key)
    return text


async def rewrite_compose_file(path: Path) -> None:
    text = await fileops.read_text(path)
    await fileops.write_file(rewrite_agent_keys(text), path)
