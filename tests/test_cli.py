"""Test CLI commands."""

import json

import pytest
from unittest.mock import patch

from complainthub.cli import main
from complainthub.core.models import PipelineResult, RedditComment, RedditPost


class FakeRedditService:
    """Returns a fixed set of posts instead of calling Reddit."""

    def fetch_posts(self, subreddit, months=None, limit=None, on_progress=None):
        if not subreddit.strip():
            raise ValueError("Please enter a subreddit name")
        return [
            RedditPost(
                id="p1", title="The app keeps crashing and freezing", content="", author="op",
                score=40, created_utc=0.0, permalink="/p1", num_comments=2,
                comments=[
                    RedditComment(id="c1", author="a", score=12, created_utc=0.0, permalink="/c1",
                                  body="App crashes constantly, freezes every day, garbage"),
                    RedditComment(id="c2", author="b", score=2, created_utc=0.0, permalink="/c2",
                                  body="Refund request ignored for weeks"),
                ],
            )
        ]


@patch('complainthub.cli.RedditService', FakeRedditService)
def test_analyze_exports_json(tmp_path, capsys):
    out = tmp_path / "result.json"

    main(["analyze", "technology", "--months", "3", "--limit", "5", "--out", str(out)])

    printed = capsys.readouterr().out
    assert "Found 3 complaints in 2 clusters" in printed
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["subreddit"] == "technology"
    assert data["clusters"][0]["frequency"] == 2


@patch('complainthub.cli.RedditService', FakeRedditService)
def test_analyze_negative_only(tmp_path):
    out = tmp_path / "result.json"

    main(["analyze", "technology", "--negative-only", "--out", str(out)])

    data = json.loads(out.read_text(encoding="utf-8"))
    assert len(data["clusters"]) == 1
    assert data["clusters"][0]["negative_terms_count"] == 1


@patch('complainthub.cli.RedditService', FakeRedditService)
def test_analyze_stage_failure_exits_non_zero(capsys):
    failed = PipelineResult(errors=["Failed to analyze complaints: boom"])
    with patch('complainthub.cli.run_pipeline', return_value=failed):
        with pytest.raises(SystemExit) as exc:
            main(["analyze", "technology"])
    assert exc.value.code == 1
    assert "boom" in capsys.readouterr().out


@patch('complainthub.cli.RedditService', FakeRedditService)
def test_invalid_subreddit_exits_with_usage_error():
    with pytest.raises(SystemExit) as exc:
        main(["fetch", "   "])
    assert exc.value.code == 2


@patch('complainthub.cli.RedditService', FakeRedditService)
def test_fetch_prints_sample(capsys):
    main(["fetch", "technology"])
    printed = capsys.readouterr().out
    assert "Fetched 1 posts (2 comments)" in printed
    assert "The app keeps crashing" in printed


def test_export_pretty(tmp_path, capsys):
    source = tmp_path / "in.json"
    source.write_text(json.dumps({"subreddit": "technology", "clusters": []}), encoding="utf-8")

    main(["export", "--in", str(source), "--pretty"])

    assert json.loads(capsys.readouterr().out)["subreddit"] == "technology"


def test_export_missing_file(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["export", "--in", str(tmp_path / "nope.json")])
    assert exc.value.code == 1


def test_no_command_prints_help(capsys):
    main([])
    assert "usage" in capsys.readouterr().out.lower()
