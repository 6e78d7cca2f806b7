"""
browserstack_runner.py
-----------------------
Runs the El País pipeline in PARALLEL, one thread per entry in
config.BS_CAPABILITIES (3 desktop + 2 mobile browsers).

Usage:
    python browserstack_runner.py

Credentials are read from environment variables (or a .env file):
    BROWSERSTACK_USERNAME
    BROWSERSTACK_ACCESS_KEY
    GOOGLE_API_KEY

With EXECUTION_ENV=local the same threads are started, but only the first
one gets a (local) browser; the others are reported as skipped.
"""

import logging
import threading
import time

import config
from elpais_pipeline.analyzer import WordAnalyzer
from elpais_pipeline.drivers import (
    SessionGate,
    provision,
    release,
    report_status,
    require_browserstack_credentials,
)
from elpais_pipeline.logging_utils import setup_logging
from elpais_pipeline.models import RunContext
from elpais_pipeline.translator import ArticleTranslator
from elpais_pipeline.pipeline import run_pipeline

logger = logging.getLogger("elpais_pipeline.runner")


def _empty_result(session: str, status: str) -> dict:
    return {"session": session, "articles": [], "repeated_words": {}, "status": status}


# ── Per-thread pipeline ──────────────────────────────────────────────────────

def run_session(
    cap: dict,
    thread_idx: int,
    results: dict,
    lock: threading.Lock,
    gate: SessionGate,
    translator: ArticleTranslator,
    execution_env: str = config.EXECUTION_ENV,
    provider=provision,
) -> None:
    """
    Provision a driver, run the full pipeline and store the outcome in the
    shared *results* dict under *thread_idx*.
    """
    session_name = cap.get("bstack:options", {}).get("sessionName", f"Thread-{thread_idx}")
    logger.info("[Thread %d] Starting: %s", thread_idx, session_name)

    try:
        handle = provider(execution_env, cap, gate)
    except Exception as exc:
        logger.error("[Thread %d] Could not start %s: %s", thread_idx, session_name, exc)
        with lock:
            results[thread_idx] = _empty_result(session_name, "failed")
        return

    if handle is None:
        with lock:
            results[thread_idx] = _empty_result(session_name, "skipped")
        return

    context = RunContext(
        handle=handle,
        session_name=session_name,
        images_dir=config.IMAGES_DIR / f"bs_thread_{thread_idx}",
    )
    try:
        result = run_pipeline(context, translator, WordAnalyzer())
        report_status(context, "passed", "El País Opinion scrape completed")
        with lock:
            results[thread_idx] = {
                "session": session_name,
                "articles": result.articles,
                "repeated_words": result.repeated_words,
                "status": "passed",
            }
        logger.info("[Thread %d] PASSED: %s", thread_idx, session_name)

    except Exception as exc:
        logger.error("[Thread %d] FAILED: %s: %s", thread_idx, session_name, exc, exc_info=True)
        report_status(context, "failed", str(exc))
        with lock:
            results[thread_idx] = {
                **_empty_result(session_name, "failed"),
                "articles": list(context.articles),
            }

    finally:
        release(context)


# ── Report ───────────────────────────────────────────────────────────────────

def print_consolidated(results: dict) -> list[str]:
    print("\n" + "=" * 65)
    print("  CONSOLIDATED RESULTS")
    print("=" * 65)

    all_translated: list[str] = []
    for idx in sorted(results):
        r = results[idx]
        print(f"\n{'─'*65}")
        print(f"  Thread {idx}: {r['session']}  [{r['status'].upper()}]")
        print(f"{'─'*65}")
        for i, art in enumerate(r["articles"], start=1):
            print(f"  [{i}] ES: {art.title_es}")
            print(f"       EN: {art.title_en or ''}")
            print(f"       Image: {art.image_path or 'N/A'}")
            if art.title_en is not None:
                all_translated.append(art.title_en)
    return all_translated


def print_status_table(results: dict) -> None:
    print("=" * 65)
    print("  SESSION STATUS SUMMARY")
    print("=" * 65)
    print(f"  {'#':<5} {'Session':<35} {'Status'}")
    print(f"  {'-'*5} {'-'*35} {'-'*8}")
    for idx in sorted(results):
        r = results[idx]
        print(f"  {idx:<5} {r['session']:<35} {r['status'].upper()}")
    print()


# ── Main ─────────────────────────────────────────────────────────────────────

def main() -> int:
    setup_logging(config.LOG_LEVEL, config.LOG_FILE or None)

    translator = ArticleTranslator()
    if config.EXECUTION_ENV == "browserstack":
        require_browserstack_credentials()

    print("=" * 65)
    print("  EL PAÍS OPINION SCRAPER — Parallel Run")
    print(f"  Environment : {config.EXECUTION_ENV}")
    print(f"  Threads     : {len(config.BS_CAPABILITIES)}")
    print("=" * 65)

    results: dict = {}
    lock = threading.Lock()
    gate = SessionGate()
    threads: list[threading.Thread] = []

    for idx, cap in enumerate(config.BS_CAPABILITIES, start=1):
        t = threading.Thread(
            target=run_session,
            args=(cap, idx, results, lock, gate, translator),
            name=f"session-{idx}",
            daemon=True,
        )
        threads.append(t)

    for t in threads:
        t.start()
        time.sleep(0.5)   # small stagger to avoid race on BrowserStack init

    # 10 minute safety timeout per thread
    for t in threads:
        t.join(timeout=600)

    all_translated = print_consolidated(results)
    WordAnalyzer().print_report(all_translated)
    print_status_table(results)

    return 0 if all(r["status"] != "failed" for r in results.values()) else 1


if __name__ == "__main__":
    raise SystemExit(main())
