"""
elpais_pipeline/drivers.py
--------------------------
Browser provisioning and teardown.

  - local         one Spanish-locale browser on this machine; when several
                  threads ask, only the first gets one (SessionGate)
  - browserstack  a Remote session on the BrowserStack hub per capability

The returned DriverHandle states what the driver can do; the pipeline never
inspects the driver type itself.
"""

import json
import logging
import threading

from selenium import webdriver
from selenium.common.exceptions import WebDriverException

import config
from elpais_pipeline.errors import ConfigurationError
from elpais_pipeline.models import Capability, DriverHandle, RunContext

logger = logging.getLogger(__name__)

WEBDRIVER_CAPABILITIES = frozenset({Capability.NAVIGABLE, Capability.SCRIPT_EXECUTABLE})


class SessionGate:
    """Lets exactly one caller through, however many threads race for it."""

    def __init__(self):
        self._lock = threading.Lock()
        self._taken = False

    def acquire_exclusive_session(self) -> bool:
        with self._lock:
            if self._taken:
                return False
            self._taken = True
            return True


def require_browserstack_credentials() -> None:
    if not config.BS_USERNAME or not config.BS_ACCESS_KEY:
        raise ConfigurationError(
            "BROWSERSTACK_USERNAME / BROWSERSTACK_ACCESS_KEY must be set for browserstack runs"
        )


# ── Local ────────────────────────────────────────────────────────────────────

def build_local_driver(browser: str = config.LOCAL_BROWSER):
    """Create a Spanish-locale Chrome, Firefox or Edge driver."""
    browser = browser.lower()
    if browser == "firefox":
        opts = webdriver.FirefoxOptions()
        opts.set_preference("intl.accept_languages", "es-ES, es")
        opts.page_load_strategy = "eager"
        driver = webdriver.Firefox(options=opts)
    else:
        opts = webdriver.EdgeOptions() if browser == "edge" else webdriver.ChromeOptions()
        opts.page_load_strategy = "eager"          # don't wait for ads/images
        opts.add_argument(f"--lang={config.LANGUAGE}")
        opts.add_argument("--disable-blink-features=AutomationControlled")
        opts.add_argument(f"--window-size={config.WINDOW_SIZE[0]},{config.WINDOW_SIZE[1]}")
        opts.add_experimental_option("prefs", {"intl.accept_languages": "es,es-ES"})
        driver = webdriver.Edge(options=opts) if browser == "edge" else webdriver.Chrome(options=opts)

    driver.implicitly_wait(config.IMPLICIT_WAIT)
    driver.set_page_load_timeout(config.PAGE_LOAD_TIMEOUT)
    return driver


# ── BrowserStack ─────────────────────────────────────────────────────────────

def build_remote_options(cap: dict):
    """
    Convert a capability dict into the matching WebDriver Options object.
    BrowserStack W3C format: capabilities go into the options object directly.
    """
    browser = cap.get("browserName", "Chrome").lower()
    if browser == "firefox":
        opts = webdriver.FirefoxOptions()
    elif browser == "safari":
        opts = webdriver.SafariOptions()
    elif browser == "edge":
        opts = webdriver.EdgeOptions()
    else:
        opts = webdriver.ChromeOptions()
        opts.add_argument(f"--lang={config.LANGUAGE}")

    opts.page_load_strategy = "eager"

    bs_opts = {
        "projectName": config.BS_PROJECT,
        "buildName": config.BS_BUILD,
        **cap.get("bstack:options", {}),
        "userName": config.BS_USERNAME,
        "accessKey": config.BS_ACCESS_KEY,
    }
    opts.set_capability("bstack:options", bs_opts)
    opts.set_capability("browserName", cap.get("browserName", "Chrome"))
    if "browserVersion" in bs_opts:
        opts.browser_version = bs_opts["browserVersion"]
    return opts


def build_remote_driver(cap: dict):
    require_browserstack_credentials()
    session_name = cap.get("bstack:options", {}).get("sessionName", "")
    logger.info("Creating BrowserStack session: %s (%s)", session_name, cap.get("browserName"))
    try:
        driver = webdriver.Remote(command_executor=config.BS_HUB_URL, options=build_remote_options(cap))
    except WebDriverException as exc:
        logger.error("Failed to create BrowserStack session %s: %s", session_name, exc.msg)
        raise
    driver.implicitly_wait(config.IMPLICIT_WAIT)
    driver.set_page_load_timeout(config.REMOTE_PAGE_LOAD_TIMEOUT)
    logger.info("Automate session URL: https://automate.browserstack.com/sessions/%s", driver.session_id)
    return driver


# ── Provisioning entry point ─────────────────────────────────────────────────

def provision(
    execution_env: str,
    cap: dict | None = None,
    gate: SessionGate | None = None,
    local_factory=build_local_driver,
    remote_factory=build_remote_driver,
) -> DriverHandle | None:
    """
    Return a handle for this run, or None when a local run is already owned
    by another thread.
    """
    env = (execution_env or "").strip().lower()
    if env == "local":
        if gate is not None and not gate.acquire_exclusive_session():
            logger.info("Another local session already started; skipping this one.")
            return None
        driver = local_factory()
        logger.info("Launched single local browser.")
        return DriverHandle(driver, WEBDRIVER_CAPABILITIES, remote=False)
    if env == "browserstack":
        driver = remote_factory(cap or {})
        return DriverHandle(driver, WEBDRIVER_CAPABILITIES, remote=True)
    raise ConfigurationError(f"Unknown execution environment: {execution_env!r}")


# ── Session status / teardown ────────────────────────────────────────────────

def status_script(status: str, reason: str) -> str:
    payload = {"action": "setSessionStatus", "arguments": {"status": status, "reason": reason}}
    return "browserstack_executor: " + json.dumps(payload)


def report_status(context: RunContext, status: str, reason: str) -> bool:
    """Mark the session passed / failed / skipped on the BrowserStack dashboard."""
    handle = context.handle
    if not handle.remote:
        context.status = status
        return False
    if not handle.supports(Capability.SCRIPT_EXECUTABLE):
        logger.warning("Handle cannot execute scripts; session status not reported.")
        return False
    try:
        handle.execute_script(status_script(status, reason))
    except WebDriverException as exc:
        logger.error("Failed to set BrowserStack session status: %s", exc.msg)
        return False
    context.status = status
    logger.info("Set BrowserStack session status: %s (%s)", status, reason)
    return True


def release(context: RunContext) -> None:
    """Quit the driver. Remote sessions nobody reported on are marked skipped."""
    try:
        if context.handle.remote and context.status is None:
            report_status(context, "skipped", "Auto-mark by teardown (no status was reported)")
    finally:
        try:
            context.driver.quit()
            logger.info("Driver quit successfully.")
        except WebDriverException as exc:
            logger.warning("Exception while quitting driver: %s", exc.msg)
