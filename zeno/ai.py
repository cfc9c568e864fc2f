"""AI summaries for new snippets via the OpenAI chat completions API.

The model is asked for a description and keywords; replies that also lead
with a refined title are accepted too.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from openai import OpenAI, OpenAIError

from .errors import AIError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"

PROMPT_TEMPLATE = """You are supplied a command or snippet of code with a title.
You must produce for a reference work:

- A concise, encyclopaedic description using a maximum of 100 words.

- A list of 5-8 keywords, separated by commas.

Do not prefix lines with bullets, numbers, colons, or any other symbols.
Use encyclopedic language, prefer subjectless, elliptical sentences.
Output must be exactly two sections separated by a blank line.

BAD EXAMPLE:
This code creates a simple static file server using Node.js...
node.js, static file server, http, readFile

GOOD EXAMPLE:
Creates simple static file server using Node.js serving files from current directory, returns 404 for missing files, listens on port 8080.

node.js, static file server, http, readfile, error handling, web development

Now produce the same structure for the following:

Title: {title}
Code:
{code}"""


@dataclass(frozen=True)
class Summary:
    title: str
    description: str
    keywords: list[str] = field(default_factory=list)


def split_keywords(text: str) -> list[str]:
    """Split a comma-separated keyword line, dropping empty items."""
    return [part.strip() for part in text.split(",") if part.strip()]


def parse_summary(reply: str, title: str) -> Summary:
    """Parse a model reply made of blank-line separated sections.

    Three sections are title, description, keywords; two are description and
    keywords with ``title`` kept as given.
    """
    sections = [part.strip() for part in reply.strip().split("\n\n", 2)]
    if len(sections) == 3:
        refined, description, keywords = sections
        return Summary(refined or title, description, split_keywords(keywords))
    if len(sections) == 2:
        description, keywords = sections
        return Summary(title, description, split_keywords(keywords))
    raise AIError(f"unexpected AI output:\n{reply.strip()}")


def summarize(
    title: str,
    code: str,
    *,
    client: OpenAI | None = None,
    model: str = DEFAULT_MODEL,
) -> Summary:
    """Ask the model for a description and keywords for one snippet."""
    if client is None:
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise AIError("OPENAI_API_KEY not set")
        client = OpenAI(api_key=api_key)

    prompt = PROMPT_TEMPLATE.format(title=title, code=code)
    try:
        response = client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
        )
    except OpenAIError as exc:
        raise AIError(str(exc)) from exc

    if not response.choices:
        raise AIError("empty AI response")
    content = response.choices[0].message.content or ""
    logger.debug("summary reply for %r: %r", title, content)
    return parse_summary(content, title)
