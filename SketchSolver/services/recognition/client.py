"""HTTP client for the remote recognition/evaluation service.

`RecognitionClient.recognize()` is blocking and is meant to be called from a
worker thread (see `services.recognition.worker.RecognitionWorker`).
"""
from __future__ import annotations

import base64
import io
import logging
from typing import Dict, List, Mapping, Optional

import numpy as np
import requests
from PIL import Image

from SketchSolver.core.errors import MalformedResponse, ServiceFailure
from SketchSolver.core.models import RecognitionResult, Snapshot
from SketchSolver.services.recognition.schema import RecognitionRequest, parse_response

logger = logging.getLogger(__name__)


def encode_snapshot(snapshot: Snapshot) -> str:
    """Encode a snapshot as a PNG data URL, alpha channel preserved."""
    img = Image.fromarray(np.ascontiguousarray(snapshot.pixels))  # (h, w, 4) uint8 -> RGBA
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    b64 = base64.b64encode(buf.getvalue()).decode("ascii")
    return f"data:image/png;base64,{b64}"


class RecognitionClient:
    def __init__(
        self,
        base_url: str,
        endpoint: str = "/calculate",
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.endpoint = endpoint if endpoint.startswith("/") else f"/{endpoint}"
        self.timeout = timeout
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.endpoint}"

    def build_payload(self, snapshot: Snapshot, variables: Mapping[str, str]) -> Dict:
        req = RecognitionRequest(image=encode_snapshot(snapshot), dict_of_vars=dict(variables))
        return req.model_dump()

    def recognize(self, snapshot: Snapshot, variables: Mapping[str, str]) -> List[RecognitionResult]:
        """Submit one snapshot and return the service's results in order.

        Raises:
            ServiceFailure: transport error, HTTP error status or failed service status.
            MalformedResponse: the body is not JSON or does not match the schema.
        """
        payload = self.build_payload(snapshot, variables)
        logger.info("Submitting %dx%d snapshot with %d variable(s) to %s",
                    snapshot.width, snapshot.height, len(variables), self.url)
        try:
            resp = self._session.post(self.url, json=payload, timeout=self.timeout)
            resp.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise ServiceFailure(f"Recognition service returned HTTP {status}", status_code=status) from e
        except requests.RequestException as e:
            raise ServiceFailure(f"Recognition request failed: {e}") from e

        try:
            body = resp.json()
        except ValueError as e:
            raise MalformedResponse("Recognition service returned a non-JSON body") from e
        logger.debug("Response: %s", body)

        results = parse_response(body)
        logger.info("Recognition returned %d result(s)", len(results))
        return results
