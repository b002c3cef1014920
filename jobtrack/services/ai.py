import copy, json, logging, re
from flask import current_app as app

logger = logging.getLogger(__name__)

FENCE_PAT = re.compile(r"^\s*```(?:json)?\s*|\s*```\s*$", re.I)

def call_ai(prompt: str, model: str | None = None) -> str:
    client = app.config["OPENAI_CLIENT"]
    resp = client.chat.completions.create(
        model=model or app.config.get("AI_MODEL", "gpt-4o-mini"),
        messages=[
            {"role": "system", "content": "You are a precise resume and job-application assistant."},
            {"role": "user", "content": prompt},
        ],
        temperature=app.config.get("AI_TEMPERATURE", 0.2),
    )
    return resp.choices[0].message.content or ""

def strip_code_fence(text: str) -> str:
    return FENCE_PAT.sub("", text or "").strip()

def parse_json_response(text, default, expect=None, label="AI response"):
    """
    Best-effort structured extraction from an LLM reply.
    Strips a markdown code fence, parses JSON and checks it is an `expect`
    instance. Any failure is logged and a copy of `default` is returned.
    """
    try:
        value = json.loads(strip_code_fence(text))
    except (TypeError, ValueError) as e:
        logger.error("Could not parse %s as JSON: %s", label, e)
        return copy.deepcopy(default)
    if expect is not None and not isinstance(value, expect):
        logger.error("Unexpected %s shape: %s", label, type(value).__name__)
        return copy.deepcopy(default)
    return value
