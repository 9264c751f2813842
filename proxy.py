import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel

from config import Settings
from errors import InputError
from model_client import VisionModelClient
from normalize import normalize_diagnosis, normalize_identification
from parsing import parse_model_json
from prompts import (
    DIAGNOSE_PROMPT,
    DIAGNOSE_SYSTEM_PROMPT,
    IDENTIFY_PROMPT,
    IDENTIFY_SYSTEM_PROMPT,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProxyTask:
    """Everything that differs between the identification and diagnosis proxies."""
    name: str
    system_prompt: str
    prompt: str
    models: List[str]
    normalize: Callable[[Dict[str, Any]], BaseModel]


def identify_task(settings: Settings) -> ProxyTask:
    return ProxyTask(
        name="identify-plant",
        system_prompt=IDENTIFY_SYSTEM_PROMPT,
        prompt=IDENTIFY_PROMPT,
        models=settings.identify_models,
        normalize=normalize_identification,
    )


def diagnose_task(settings: Settings) -> ProxyTask:
    return ProxyTask(
        name="diagnose-disease",
        system_prompt=DIAGNOSE_SYSTEM_PROMPT,
        prompt=DIAGNOSE_PROMPT,
        models=settings.diagnose_models,
        normalize=normalize_diagnosis,
    )


def run_task(task: ProxyTask, image_data: Optional[str], client: VisionModelClient) -> BaseModel:
    """
    Validate the image, ask the models, then extract and normalize the reply.
    Failures surface as ProxyError subclasses.
    """
    if not image_data:
        raise InputError()

    logger.info(f"[{task.name}] Received image data ({len(image_data)} chars)")

    raw_text = client.complete(task.models, task.system_prompt, task.prompt, image_data)
    logger.debug(f"[{task.name}] Model response: {raw_text[:200]!r}")

    data = parse_model_json(raw_text)
    result = task.normalize(data)

    logger.info(f"[{task.name}] Successfully processed image")
    return result


def identify_plant(image_data: Optional[str], client: VisionModelClient, settings: Settings) -> BaseModel:
    return run_task(identify_task(settings), image_data, client)


def diagnose_disease(image_data: Optional[str], client: VisionModelClient, settings: Settings) -> BaseModel:
    return run_task(diagnose_task(settings), image_data, client)
