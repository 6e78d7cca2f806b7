"""
config.py
---------
Central configuration for the El País Opinion pipeline.
Edit this file (or the environment / a .env file) to adjust behaviour
without touching the source code.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ── URLs ─────────────────────────────────────────────────────────────────────
BASE_URL          = os.getenv("ELPAIS_BASE_URL", "https://elpais.com/")
OPINION_URL       = os.getenv("ELPAIS_OPINION_URL", "https://elpais.com/opinion/")
SECTION_SUBSTRING = "/opinion/"   # a link belongs to the section if it contains this

# ── Scraping ─────────────────────────────────────────────────────────────────
NUM_ARTICLES = int(os.getenv("NUM_ARTICLES", "5"))
LANGUAGE     = "es"               # Locale sent to the browser
CRAWL_DELAY  = (1.0, 2.0)         # polite pause between article visits (seconds)

# XPath expressions, keyed by the name the pipeline asks for.
LOCATORS = {
    "language":        '//*[text()="Seleccione:"]/following-sibling::div//span[text()="España"]',
    "opinion_nav":     '//nav[@class="cs_m"]//a[text()="Opinión"]',
    "opinion_header":  '//h1/a[text()="Opinión"]',
    "all_articles":    "//article",
    "article_links":   "//article//h2/a",
    "article_title":   "//h1",
    "article_image":   "//article/header//img",
    "first_paragraph": "(//header/following-sibling::div/p)[1]",
    "cookie_button":   (
        "//button[@id='didomi-notice-agree-button'"
        " or contains(., 'Aceptar') or contains(., 'Accept')]"
    ),
}

# ── Waits (seconds) ──────────────────────────────────────────────────────────
TIMEOUTS = {
    "page_ready":     10,
    "consent":        5,
    "language":       5,
    "nav":            6,
    "section_header": 5,
    "title":          6,
    "paragraph":      5,
    "image":          4,
}
POLL_FREQUENCY = 0.25

# ── Output ────────────────────────────────────────────────────────────────────
BASE_DIR   = Path(__file__).parent
IMAGES_DIR = Path(os.getenv("ELPAIS_IMAGES_DIR", BASE_DIR / "images"))

# ── Browser / Timeouts ───────────────────────────────────────────────────────
PAGE_LOAD_TIMEOUT        = 60     # seconds before driver.get() gives up (local)
REMOTE_PAGE_LOAD_TIMEOUT = 120    # the grid is slower to hand pages back
IMPLICIT_WAIT            = 5
WINDOW_SIZE              = (1280, 900)
LOCAL_BROWSER            = os.getenv("BROWSER", "chrome")

# ── Translation ───────────────────────────────────────────────────────────────
TRANSLATE_URL      = "https://translation.googleapis.com/language/translate/v2"
GOOGLE_API_KEY     = os.getenv("GOOGLE_API_KEY", "").strip()
TRANSLATION_SOURCE = "es"
TRANSLATION_TARGET = "en"
TRANSLATE_TIMEOUT  = (15, 30)     # (connect, read) seconds

# ── Word-frequency analysis ───────────────────────────────────────────────────
# Report words that appear STRICTLY MORE THAN this many times
REPEAT_THRESHOLD = 2

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE  = os.getenv("LOG_FILE", "")   # empty → console only

# ── Execution environment ─────────────────────────────────────────────────────
EXECUTION_ENV = os.getenv("EXECUTION_ENV", "browserstack").strip().lower()

# ── BrowserStack ─────────────────────────────────────────────────────────────
BS_USERNAME   = os.getenv("BROWSERSTACK_USERNAME", "").strip()
BS_ACCESS_KEY = os.getenv("BROWSERSTACK_ACCESS_KEY", "").strip()
BS_HUB_URL    = "https://hub.browserstack.com/wd/hub"
BS_PROJECT    = "ElPais Scraper"
BS_BUILD      = "elpais-opinion-scrape"

# 5 browser/device combinations (3 desktop + 2 real mobile)
BS_CAPABILITIES = [
    {   # 1: Desktop Chrome / Windows 11
        "browserName": "Chrome",
        "bstack:options": {
            "os": "Windows", "osVersion": "11",
            "browserVersion": "latest",
            "sessionName": "Chrome Win11",
        },
    },
    {   # 2: Desktop Firefox / Windows 10
        "browserName": "Firefox",
        "bstack:options": {
            "os": "Windows", "osVersion": "10",
            "browserVersion": "latest",
            "sessionName": "Firefox Win10",
        },
    },
    {   # 3: Desktop Safari / macOS Ventura
        "browserName": "Safari",
        "bstack:options": {
            "os": "OS X", "osVersion": "Ventura",
            "browserVersion": "latest",
            "sessionName": "Safari macOS Ventura",
        },
    },
    {   # 4: Real mobile: Samsung Galaxy S23 / Android
        "browserName": "Chrome",
        "bstack:options": {
            "deviceName": "Samsung Galaxy S23", "osVersion": "13.0",
            "realMobile": "true",
            "sessionName": "Galaxy S23 Chrome",
        },
    },
    {   # 5: Real mobile: iPhone 14 / iOS Safari
        "browserName": "Safari",
        "bstack:options": {
            "deviceName": "iPhone 14", "osVersion": "16",
            "realMobile": "true",
            "sessionName": "iPhone 14 Safari",
        },
    },
]
