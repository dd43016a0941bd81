# apicheck/service.py
"""FastAPI service for running API checks over HTTP.
- /health : liveness probe
- /run    : Accepts JSON { "hostname"?: "...", "tests": [...] } and returns per-test results
"""
import logging
import os
from typing import Any, Dict, Iterator, List, Optional

import uvicorn
from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from apicheck.api_types import TestDefinitionError
from apicheck.config import get_settings
from apicheck.loader import parse_tests
from apicheck.reporter import result_to_dict, summarize
from apicheck.runner import APITestRunner

logger = logging.getLogger(__name__)

app = FastAPI(title="API Check Service")


class RunRequest(BaseModel):
    hostname: Optional[str] = None
    tests: List[Dict[str, Any]] = Field(default_factory=list)


def get_runner() -> Iterator[APITestRunner]:
    with APITestRunner(get_settings()) as runner:
        yield runner


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/run")
def run(req: RunRequest, runner: APITestRunner = Depends(get_runner)):
    try:
        tests = parse_tests(req.tests, hostname=req.hostname)
    except TestDefinitionError as e:
        raise HTTPException(status_code=422, detail=str(e))

    logger.info(f"Running {len(tests)} submitted test(s)")
    results = runner.run_tests(tests)
    return {"summary": summarize(results), "results": [result_to_dict(r) for r in results]}


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv('PORT', 8000)))


if __name__ == "__main__":
    main()
