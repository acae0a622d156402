import threading, traceback
import diary
from diary import Value

def main():
    log = diary.new(
        {"threads": Value(threading.active_count), "stack": Value(lambda: traceback.format_stack(limit=3))},
        diary.set_caller_format("+v"),
    )
    log.debug("not written, so the stack is never captured")
    log.info("snapshot")
    log.info("bad generator is dropped, not raised", {"oops": Value(lambda x: x)})

if __name__ == "__main__":
    main()
