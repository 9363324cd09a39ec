"""Live event log fed by worker threads.

Workers log through the standard logging module inside spans; the main
thread redraws a filtered, newest-first view of the shared buffer.

Run with:
    python examples/live_log.py "worker[job{kind=resize}]=info"
"""

import logging
import random
import sys
import threading
import time

from tracetail import EventBuffer, EventLogView, TracetailHandler, span

logger = logging.getLogger("worker")


def run_worker(worker_id: int, stop: threading.Event) -> None:
    """Emit a few events per job until told to stop."""
    while not stop.is_set():
        kind = random.choice(["resize", "upload", "thumbnail"])
        with span("worker", "job", kind=kind, worker=worker_id):
            logger.debug("job started")
            time.sleep(random.uniform(0.01, 0.1))
            if random.random() < 0.1:
                logger.warning("job slow", extra={"kind": kind})
            logger.info("job finished")


def main() -> None:
    filter_text = sys.argv[1] if len(sys.argv) > 1 else ""

    buffer = EventBuffer(capacity=200)
    logger.setLevel(logging.DEBUG)
    logger.addHandler(TracetailHandler(buffer))

    view = EventLogView(buffer, filter_text)
    if not view.filter_state.is_valid:
        print(f"invalid filter, showing everything: {view.filter_state.error}")

    stop = threading.Event()
    workers = [
        threading.Thread(target=run_worker, args=(n, stop), daemon=True)
        for n in range(4)
    ]
    for worker in workers:
        worker.start()

    try:
        while True:
            time.sleep(1)
            # clear screen, cursor home
            print("\033[2J\033[H", end="")
            for line in view.render()[:20]:
                print(line)
    except KeyboardInterrupt:
        stop.set()


if __name__ == "__main__":
    main()
