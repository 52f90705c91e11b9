from fastapi import FastAPI
from pydantic import BaseModel
from models import ApiErr
import httpx, logging, os, uuid

logger = logging.getLogger(__name__)

# environment variables
LEX = os.getenv("LEX_URL", "http://lexer-svc:8000/lex")
PARSE = os.getenv("PARSE_URL", "http://parser-svc:8000/compile")  # parser forwards to printer
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))

app = FastAPI(title="gateway")

@app.get("/healthz")
def healthz():
    return {"ok": True}

def client():
    return httpx.AsyncClient(timeout=HTTP_TIMEOUT)

class RunReq(BaseModel):
    source: str

@app.post("/run")
async def run(req: RunReq):
    rid = str(uuid.uuid4())
    hdr = {"X-Request-Id": rid}

    try:
        async with client() as c:
            # Step 1: lexical analysis, errors do not stop the pipeline
            lex = (await c.post(LEX, json={"source": req.source}, headers=hdr)).json()
            if not lex.get("ok"):
                return lex
            lex_errors = lex["data"]["errors"]
            logger.info("request %s: %d tokens, %d lexical errors",
                        rid, len(lex["data"]["tokens"]), len(lex_errors))

            # Step 2: tokens to parser, which forwards the tree to the printer
            result = (await c.post(PARSE, json={"tokens": lex["data"]["tokens"]}, headers=hdr)).json()
    except (httpx.HTTPError, ValueError) as e:  # ValueError: reply was not JSON
        logger.warning("request %s failed: %s", rid, e)
        return ApiErr(phase="gateway", code="E_FORWARD", msg=f"Failed to contact pipeline: {e}")

    if result.get("ok"):
        result["data"]["errors"] = lex_errors
        return result
    result["errors"] = lex_errors + result.get("errors", [])
    return result
