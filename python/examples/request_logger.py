import time
from uuid import uuid4
import diary

def handle(log: diary.Logger, path: str):
    req = log.new({"request_id": str(uuid4()), "path": path})
    start = time.perf_counter()
    req.debug("routing request")
    req.info("request completed", {"status": 200, "duration_ms": round((time.perf_counter() - start) * 1000, 3)})

def main():
    log = diary.init(level="debug", context={"service": "py-orders", "env": "dev"})
    for path in ("/orders", "/orders/42"):
        handle(log, path)
    diary.error("upstream unavailable", {"error": ConnectionError("oms refused connection")})
    diary.shutdown()

if __name__ == "__main__":
    main()
