from opentelemetry.sdk.trace import TracerProvider
import diary
from diary.tracing import with_trace

def main():
    tracer = TracerProvider().get_tracer("py-traced")
    log = with_trace(diary.new({"service": "py-traced"}))
    log.info("before span")
    with tracer.start_as_current_span("signals.emit"):
        log.info("publishing signal", {"symbol": "AAPL"})

if __name__ == "__main__":
    main()
