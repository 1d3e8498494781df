"""In-memory stand-in for the loan application record store"""

import uuid
from typing import Any, Dict

from fastapi import Body, FastAPI, HTTPException

app = FastAPI(title="Mock Record Store", version="1.0.0")
RECORDS: Dict[str, Dict[str, Any]] = {}


@app.get("/health")
def health(): return {"status": "ok"}


@app.post("/entities", status_code=201)
def create_entity(data: Dict[str, Any] = Body(...)):
    record = {**data, "id": str(uuid.uuid4()), "confirmed": False}
    RECORDS[record["id"]] = record
    return record


@app.get("/entities/{entity_id}")
def get_entity(entity_id: str):
    if entity_id not in RECORDS:
        raise HTTPException(status_code=404, detail="entity not found")
    return RECORDS[entity_id]


@app.patch("/entities/{entity_id}")
def update_entity(entity_id: str, data: Dict[str, Any] = Body(...)):
    if entity_id not in RECORDS:
        raise HTTPException(status_code=404, detail="entity not found")
    RECORDS[entity_id] = {**RECORDS[entity_id], **data, "id": entity_id}
    return RECORDS[entity_id]
