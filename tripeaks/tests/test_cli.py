"""
Tests for the command-line interface.
"""

import random

import pytest

from ..cli import main
from ..progression.fragments import Rarity, generate_fragment
from ..progression.progress import PlayerProgress
from ..storage import ProgressStore


class TestCLI:
    """Tests for the tripeaks command."""

    def test_deal(self, capsys):
        main(["deal", "--seed", "3"])
        out = capsys.readouterr().out

        assert "Tableau:" in out
        assert "Stock: 23 cards" in out
        assert "##" in out

    def test_deal_is_reproducible(self, capsys):
        main(["deal", "--seed", "3"])
        first = capsys.readouterr().out
        main(["deal", "--seed", "3"])

        assert capsys.readouterr().out == first

    def test_progress(self, tmp_path, capsys):
        ProgressStore(tmp_path).save(PlayerProgress(games_played=4, games_won=3))
        main(["progress", "--data-dir", str(tmp_path)])
        out = capsys.readouterr().out

        assert "Games played: 4" in out
        assert "common: 0/5" in out

    def test_craft(self, tmp_path, capsys):
        rng = random.Random(0)
        fragments = [generate_fragment(Rarity.COMMON, rng) for _ in range(5)]
        ProgressStore(tmp_path).save(PlayerProgress(fragments=fragments))

        main(["craft", "common", "--data-dir", str(tmp_path)])

        assert "Sun Stone Tablet" in capsys.readouterr().out
        assert len(ProgressStore(tmp_path).load().artifacts) == 1

    def test_craft_without_fragments_fails(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["craft", "epic", "--data-dir", str(tmp_path)])

        assert exc_info.value.code == 1
        assert "Not enough epic fragments" in capsys.readouterr().out

    def test_no_command(self):
        with pytest.raises(SystemExit):
            main([])
