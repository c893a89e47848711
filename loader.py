from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

import requests

from dataset import Dataset, parse_dataset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadSuccess:
    url: str
    dataset: Dataset


@dataclass(frozen=True)
class LoadFailure:
    url: str
    error: Exception


LoadOutcome = Union[LoadSuccess, LoadFailure]


def fetch_dataset(
    url: str, *, timeout: float = 10.0, session: Optional[requests.Session] = None
) -> LoadOutcome:
    """
    Issue a single GET for the dataset document. Network errors, non-2xx
    responses and payloads that are not a valid dataset are logged and
    returned as LoadFailure; nothing is retried.
    """
    http = session if session is not None else requests
    try:
        response = http.get(url, timeout=timeout)
        response.raise_for_status()
        dataset = parse_dataset(response.json())
    except (requests.RequestException, ValueError) as exc:
        status = getattr(getattr(exc, "response", None), "status_code", None)
        logger.error(
            "Failed to load temperature dataset",
            extra={"url": url, "status": status, "reason": str(exc)},
        )
        return LoadFailure(url=url, error=exc)

    logger.info(
        "Loaded temperature dataset",
        extra={"url": url, "status": response.status_code, "observation_count": len(dataset)},
    )
    return LoadSuccess(url=url, dataset=dataset)
