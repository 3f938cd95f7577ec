"""
Unified AI client: the generation gateway used by every AI feature.

Provider priority:
  1. Google Gemini (google-genai): when GEMINI_API_KEY is set
  2. Oracle GenAI (OCI signed): when OCI config + compartment + model are set
  3. Anthropic: when ANTHROPIC_API_KEY is set

There is no silent fallback between providers: if the configured provider
fails, the error surfaces as GenerationFailed. Nothing is retried.
"""

import json
import asyncio
import logging
from functools import lru_cache
from pathlib import Path

import oci
from google import genai
from google.genai import types as genai_types

from careercraft.config import settings
from careercraft.errors import GenerationFailed, MissingInput

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Google Gemini
# ─────────────────────────────────────────────────────────────────────────────

@lru_cache(maxsize=1)
def _gemini_client() -> genai.Client:
    """Process-wide Gemini client, built on first use."""
    return genai.Client(api_key=settings.GEMINI_API_KEY)


def _gemini_contents(messages: list[dict]) -> list[dict]:
    contents = []
    for m in messages:
        role = "user" if m.get("role", "user") == "user" else "model"
        contents.append({"role": role, "parts": [{"text": m.get("content", "")}]})
    return contents


async def _gemini_chat(
    system: str,
    messages: list[dict],
    max_tokens: int,
    temperature: float,
) -> str:
    config = genai_types.GenerateContentConfig(
        system_instruction=system or None,
        max_output_tokens=max_tokens,
        temperature=temperature,
    )
    response = await _gemini_client().aio.models.generate_content(
        model=settings.GEMINI_MODEL,
        contents=_gemini_contents(messages),
        config=config,
    )
    return response.text or ""


# ─────────────────────────────────────────────────────────────────────────────
# Oracle GenAI: request / response builders
# ─────────────────────────────────────────────────────────────────────────────

def _is_cohere(model_id: str) -> bool:
    forced = settings.ORACLE_GENAI_API_FORMAT.strip().upper()
    if forced == "COHERE":
        return True
    if forced == "GENERIC":
        return False
    return model_id.lower().startswith("cohere.")


def _build_chat_body(
    system: str,
    messages: list[dict],
    max_tokens: int,
    temperature: float,
) -> dict:
    """Build JSON body for POST /20231130/actions/chat."""
    model_id = settings.ORACLE_GENAI_MODEL

    serving_mode = {"servingType": "ON_DEMAND", "modelId": model_id}

    if _is_cohere(model_id):
        # Cohere: single "message" string + optional history + preamble
        history = []
        for m in messages[:-1]:
            role = "USER" if m.get("role", "user") == "user" else "CHATBOT"
            history.append({"role": role, "message": m.get("content", "")})

        last_msg = messages[-1].get("content", "") if messages else ""
        chat_req: dict = {
            "apiFormat": "COHERE",
            "message": last_msg,
            "maxTokens": max_tokens,
            "temperature": temperature,
            "isStream": False,
        }
        if system:
            chat_req["preambleOverride"] = system
        if history:
            chat_req["chatHistory"] = history
    else:
        # Generic / Llama: messages array + systemMessage
        oci_msgs = []
        for m in messages:
            role = "USER" if m.get("role", "user") == "user" else "ASSISTANT"
            oci_msgs.append({
                "role": role,
                "content": [{"type": "TEXT", "text": m.get("content", "")}],
            })
        chat_req = {
            "apiFormat": "GENERIC",
            "messages": oci_msgs,
            "maxTokens": max_tokens,
            "temperature": temperature,
            "isStream": False,
        }
        if system:
            chat_req["systemMessage"] = system

    body: dict = {"servingMode": serving_mode, "chatRequest": chat_req}
    if settings.ORACLE_GENAI_COMPARTMENT_ID:
        body["compartmentId"] = settings.ORACLE_GENAI_COMPARTMENT_ID
    return body


def _extract_text(response_json: dict) -> str:
    """Pull plain text from an /actions/chat response."""
    chat_resp = response_json.get("chatResponse", {})
    fmt = chat_resp.get("apiFormat", "GENERIC")
    if fmt == "COHERE":
        return chat_resp.get("text", "")
    choices = chat_resp.get("choices", [])
    if not choices:
        return ""
    content = choices[0].get("message", {}).get("content", [])
    if isinstance(content, list) and content:
        return content[0].get("text", "")
    return str(content)


# ─────────────────────────────────────────────────────────────────────────────
# Oracle GenAI: OCI signed requests
# ─────────────────────────────────────────────────────────────────────────────

def _oci_config() -> dict:
    cfg_file = str(Path(settings.OCI_CONFIG_FILE).expanduser())
    return oci.config.from_file(file_location=cfg_file, profile_name=settings.OCI_CONFIG_PROFILE)


def _oci_endpoint(cfg: dict) -> str:
    if settings.ORACLE_GENAI_BASE_URL:
        return settings.ORACLE_GENAI_BASE_URL.rstrip("/")
    region = cfg.get("region", "us-chicago-1")
    return f"https://inference.generativeai.{region}.oci.oraclecloud.com"


def _oci_post(path: str, body: dict, timeout: tuple = (10.0, 300.0)) -> dict:
    """Perform a signed POST request via OCI base client and return JSON dict.

    Args:
        timeout: (connect_timeout, read_timeout) in seconds.
    """
    cfg = _oci_config()
    endpoint = _oci_endpoint(cfg)

    client = oci.generative_ai_inference.GenerativeAiInferenceClient(
        config=cfg,
        service_endpoint=endpoint,
        timeout=timeout,
    )

    response = client.base_client.call_api(
        resource_path=path,
        method="POST",
        header_params={"content-type": "application/json"},
        body=body,
        response_type="str",
    )
    text = response.data if isinstance(response.data, str) else str(response.data)
    return json.loads(text)


async def _oracle_chat(
    system: str,
    messages: list[dict],
    max_tokens: int,
    temperature: float,
) -> str:
    body = _build_chat_body(system, messages, max_tokens, temperature)
    # OCI SDK already prefixes the API version path (/20231130).
    data = await asyncio.to_thread(_oci_post, "/actions/chat", body)
    return _extract_text(data)


# ─────────────────────────────────────────────────────────────────────────────
# Anthropic
# ─────────────────────────────────────────────────────────────────────────────

async def _anthropic_chat(system: str, messages: list[dict], max_tokens: int, temperature: float) -> str:
    import anthropic

    client = anthropic.AsyncAnthropic(api_key=settings.ANTHROPIC_API_KEY)
    kwargs: dict = {
        "model": settings.ANTHROPIC_MODEL,
        "max_tokens": max_tokens,
        "temperature": temperature,
        "messages": messages,
    }
    if system:
        kwargs["system"] = system
    response = await client.messages.create(**kwargs)
    return response.content[0].text


# ─────────────────────────────────────────────────────────────────────────────
# Status helpers
# ─────────────────────────────────────────────────────────────────────────────

def _gemini_configured() -> bool:
    return bool(settings.GEMINI_API_KEY)


def _oracle_configured() -> bool:
    return bool(
        settings.OCI_CONFIG_FILE
        and settings.OCI_CONFIG_PROFILE
        and settings.ORACLE_GENAI_MODEL
        and settings.ORACLE_GENAI_COMPARTMENT_ID
    )


def _anthropic_configured() -> bool:
    return bool(settings.ANTHROPIC_API_KEY)


def ai_provider_name() -> str:
    if _gemini_configured():
        return f"Google Gemini ({settings.GEMINI_MODEL})"
    if _oracle_configured():
        return f"Oracle GenAI OCI-Signed ({settings.ORACLE_GENAI_MODEL})"
    if _anthropic_configured():
        return f"Anthropic ({settings.ANTHROPIC_MODEL})"
    return "none"


async def ai_health_check() -> dict:
    """Live connectivity test. Called by /api/health/ai."""
    provider = ai_provider_name()
    if provider == "none":
        return {
            "provider": "none",
            "status": "unconfigured",
            "message": "Set GEMINI_API_KEY, the ORACLE_GENAI_* settings or ANTHROPIC_API_KEY in backend/.env.",
        }

    try:
        reply = await chat(
            system="You are a test assistant.",
            messages=[{"role": "user", "content": "Reply with exactly: OK"}],
            max_tokens=10,
            temperature=0.0,
        )
        return {"provider": provider, "status": "ok", "test_reply": reply.strip()}
    except Exception as e:
        return {"provider": provider, "status": "error", "error": str(e)}


# ─────────────────────────────────────────────────────────────────────────────
# Public entry points
# ─────────────────────────────────────────────────────────────────────────────

async def chat(
    system: str,
    messages: list[dict],
    max_tokens: int = 400,
    temperature: float = 0.7,
) -> str:
    """Send a chat completion request to the configured provider.

    Raises RuntimeError when no provider is configured; provider errors
    propagate unchanged.
    """
    if _gemini_configured():
        return await _gemini_chat(system, messages, max_tokens, temperature)

    if _oracle_configured():
        return await _oracle_chat(system, messages, max_tokens, temperature)

    if _anthropic_configured():
        return await _anthropic_chat(system, messages, max_tokens, temperature)

    raise RuntimeError("AI provider not configured")


async def generate_text(prompt: str, max_tokens: int = None, temperature: float = None) -> str:
    """Submit a single prompt and return the raw completion text.

    One outbound call per invocation; any failure becomes GenerationFailed.
    """
    if not prompt or not prompt.strip():
        raise MissingInput("Prompt must not be empty", field="prompt")

    try:
        return await chat(
            system="",
            messages=[{"role": "user", "content": prompt}],
            max_tokens=max_tokens or settings.AI_MAX_TOKENS,
            temperature=settings.AI_TEMPERATURE if temperature is None else temperature,
        )
    except Exception as e:
        logger.error("AI generation failed: %s", e, extra={"provider": ai_provider_name()})
        raise GenerationFailed() from e
