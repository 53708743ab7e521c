"""Shared fixtures and fake collaborators for the scraper tests."""

from typing import Dict, List, Optional, Tuple

import pytest

from steam_scraper.adapters.catalog import TagCatalog
from steam_scraper.config import ScraperConfig
from steam_scraper.utils.parsing import make_soup

ALPHA_LINK = "https://store.steampowered.com/app/10/Alpha_Quest/?snr=1_7_7_151_150_1"
BETA_LINK = "https://store.steampowered.com/app/20/Beta_Blocks/?snr=1_7_7_151_150_1"
SEARCH_URL = "https://store.steampowered.com/search/?term=alpha"

SEARCH_HTML = f"""
<html><body>
<div id="search_resultsRows">
  <a href="{ALPHA_LINK}" data-ds-tagids="[19,3953,492]" class="search_result_row">
    <div class="col search_name ellipsis"><span class="title">
      Alpha Quest
    </span></div>
    <div class="col search_released responsive_secondrow">  12 Jan, 2020 </div>
    <div class="col search_reviewscore responsive_secondrow">
      <span class="search_review_summary positive"
            data-tooltip-html="Very Positive&lt;br&gt;(1,234 reviews)"></span>
    </div>
    <div class="col search_price_discount_combined responsive_secondrow">
      <div class="discount_block"><div class="discount_prices">
        <div class="discount_final_price"> $19.99 </div>
      </div></div>
    </div>
  </a>
  <a href="{BETA_LINK}" data-ds-tagids="[]" class="search_result_row">
    <div class="col search_name ellipsis"><span class="title">Beta Blocks</span></div>
  </a>
</div>
</body></html>
"""

DETAIL_HTML = """
<html><body>
<div id="game_highlights">
  <div class="rightcol">
    <div>
      <div class="glance_ctn_responsive_left">
        <div id="userReviews">Very Positive</div>
        <div class="release_date">12 Jan, 2020</div>
        <div class="dev_row">
          <div class="subtitle column">Developer:</div>
          <div class="summary column" id="developers_list"><a href="#">Studio One</a></div>
        </div>
        <div class="dev_row">
          <div class="subtitle column">Publisher:</div>
          <div class="summary column"><a href="#">Big Pub</a></div>
        </div>
      </div>
    </div>
  </div>
</div>
<div class="game_description_snippet">
  A fast game
about blocks.
</div>
<div class="game_page_autocollapse sys_req">
  <div class="sysreq_contents"><ul><li>OS: Windows 10

  64-bit  </li><li>Memory: 8 GB RAM</li></ul></div>
</div>
</body></html>
"""


class FakeConsole:
    """Scripted console: answers prompts from a list, records everything shown."""

    def __init__(self, answers: List[str]) -> None:
        self.answers = list(answers)
        self.prompts: List[str] = []
        self.shown: List[str] = []

    def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    def show(self, message: str) -> None:
        self.shown.append(message)

    def output(self) -> str:
        return "\n".join(self.shown)


class FakeFetcher:
    """Serves canned pages by URL; a stored exception is raised instead of returned."""

    def __init__(self, pages: Dict[str, object]) -> None:
        self.pages = pages
        self.calls: List[Tuple[str, Optional[Dict[str, str]]]] = []

    def get_document(self, url, cookies=None):
        self.calls.append((url, cookies))
        page = self.pages[url]
        if isinstance(page, BaseException):
            raise page
        return make_soup(page)


class FakeOpener:
    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.opened: List[str] = []

    def __call__(self, path: str) -> bool:
        self.opened.append(path)
        return self.result


@pytest.fixture
def catalog():
    return TagCatalog({"19": "Action", "492": "Strategy"})


@pytest.fixture
def config(tmp_path):
    return ScraperConfig(
        tags_path=str(tmp_path / "tags.json"),
        output_dir=str(tmp_path / "resultfiles"),
        birthtime="283993201",
    )
