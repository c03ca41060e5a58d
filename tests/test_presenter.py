"""
Tests for the RandomPresenter view state.

The pool builder and the random source are injected, so every index is deterministic.
"""

from itertools import cycle
from unittest.mock import Mock

import pytest

from recipe_roulette.config import DEFAULT_QUERY, ConfigError, EdamamConfig
from recipe_roulette.connectors.base import RecipeAPIError
from recipe_roulette.connectors.edamam_connector import EdamamConnector
from recipe_roulette.models import FetchState, NormalizedRecipe
from recipe_roulette.presenter import NO_RESULTS_MESSAGE, RandomPresenter
from recipe_roulette.search import build_pool


def make_pool(size):
    return [NormalizedRecipe(title=f"Recipe {i}", url=f"https://r/{i}") for i in range(size)]


def scripted_randrange(*values):
    """Random source that returns the given draws in order, clamped into range."""
    draws = cycle(values)
    return lambda n: next(draws) % n


class TestSearch:
    """Test cases for RandomPresenter.search."""

    def test_initial_state(self):
        presenter = RandomPresenter(pool_builder=Mock(), default_query="salad")

        assert presenter.state is FetchState.IDLE
        assert presenter.query == "salad"
        assert presenter.current is None
        assert presenter.pool_size == 0
        assert not presenter.can_shuffle

    def test_successful_search_sets_pool_and_index(self):
        """Test that a non-empty result replaces the pool and draws an index."""
        pool = make_pool(10)
        builder = Mock(return_value=pool)
        presenter = RandomPresenter(pool_builder=builder, randrange=lambda n: 7)

        presenter.search("chicken")

        builder.assert_called_once_with("chicken")
        assert presenter.state is FetchState.READY
        assert presenter.error is None
        assert presenter.pool == pool
        assert presenter.index == 7
        assert presenter.current.title == "Recipe 7"
        assert presenter.query == "chicken"
        assert presenter.can_shuffle

    def test_randrange_called_with_pool_size(self):
        randrange = Mock(return_value=0)
        presenter = RandomPresenter(pool_builder=Mock(return_value=make_pool(42)), randrange=randrange)

        presenter.search("soup")

        randrange.assert_called_once_with(42)

    @pytest.mark.parametrize("size", [1, 2, 5, 100])
    def test_index_in_range_with_real_random(self, size):
        presenter = RandomPresenter(pool_builder=Mock(return_value=make_pool(size)))

        for _ in range(20):
            presenter.search("salad")
            assert 0 <= presenter.index < size

    def test_empty_result_clears_pool(self):
        """Test that an empty result is an error message and clears the previous pool."""
        builder = Mock(side_effect=[make_pool(3), []])
        presenter = RandomPresenter(pool_builder=builder, randrange=lambda n: 2)
        presenter.search("salad")

        presenter.search("zzzz")

        assert presenter.state is FetchState.ERROR
        assert presenter.error == NO_RESULTS_MESSAGE
        assert presenter.pool == []
        assert presenter.index == 0
        assert presenter.current is None

    def test_failure_keeps_previous_pool(self):
        """Test that a failed search leaves pool and index unchanged."""
        pool = make_pool(4)
        builder = Mock(side_effect=[pool, RecipeAPIError("HTTP 429", status_code=429)])
        presenter = RandomPresenter(pool_builder=builder, randrange=lambda n: 3)
        presenter.search("salad")

        presenter.search("pasta")

        assert presenter.state is FetchState.ERROR
        assert "429" in presenter.error
        assert presenter.pool == pool
        assert presenter.index == 3
        assert not presenter.is_loading

    def test_config_error_message_surfaces(self):
        presenter = RandomPresenter(pool_builder=Mock(side_effect=ConfigError("Missing EDAMAM_APP_ID env var.")))

        presenter.search("salad")

        assert presenter.state is FetchState.ERROR
        assert presenter.error == "Missing EDAMAM_APP_ID env var."

    def test_unexpected_exception_is_caught(self):
        """Test that any failure becomes a message instead of propagating."""
        presenter = RandomPresenter(pool_builder=Mock(side_effect=KeyError("hits")))

        presenter.search("salad")

        assert presenter.state is FetchState.ERROR
        assert "hits" in presenter.error

    def test_exception_without_message_uses_class_name(self):
        presenter = RandomPresenter(pool_builder=Mock(side_effect=RuntimeError()))

        presenter.search("salad")

        assert presenter.error == "RuntimeError"

    def test_error_cleared_by_next_search(self):
        builder = Mock(side_effect=[RecipeAPIError("HTTP 500", status_code=500), make_pool(2)])
        presenter = RandomPresenter(pool_builder=builder, randrange=lambda n: 0)
        presenter.search("salad")

        presenter.search("salad")

        assert presenter.state is FetchState.READY
        assert presenter.error is None

    def test_loading_while_builder_runs(self):
        """Test that the builder runs in the LOADING state with the error cleared."""
        seen = {}

        def builder(query):
            seen["state"] = presenter.state
            seen["error"] = presenter.error
            seen["can_shuffle"] = presenter.can_shuffle
            return make_pool(2)

        presenter = RandomPresenter(pool_builder=builder, randrange=lambda n: 0)
        presenter.error = "old error"
        presenter.pool = make_pool(3)

        presenter.search("salad")

        assert seen == {"state": FetchState.LOADING, "error": None, "can_shuffle": False}

    def test_default_query_comes_from_config(self):
        presenter = RandomPresenter(pool_builder=Mock())

        assert presenter.default_query == DEFAULT_QUERY
        assert presenter.query == DEFAULT_QUERY


class TestTwoStepSearch:
    """Test cases for begin_search()/run_search(), used when controls render in between."""

    def test_controls_disabled_between_begin_and_run(self):
        """Test that both buttons report disabled until the fetch has run."""
        builder = Mock(return_value=make_pool(3))
        presenter = RandomPresenter(pool_builder=builder, randrange=lambda n: 1)
        presenter.search("salad")
        assert presenter.can_shuffle

        presenter.begin_search("pasta")

        assert presenter.is_loading
        assert not presenter.can_shuffle
        assert builder.call_count == 1

    def test_run_search_completes_the_started_query(self):
        builder = Mock(return_value=make_pool(3))
        presenter = RandomPresenter(pool_builder=builder, randrange=lambda n: 2)

        token = presenter.begin_search("pasta")
        presenter.run_search(token)

        builder.assert_called_once_with("pasta")
        assert presenter.state is FetchState.READY
        assert presenter.index == 2
        assert presenter.can_shuffle

    def test_run_search_failure_ends_loading(self):
        presenter = RandomPresenter(pool_builder=Mock(side_effect=RecipeAPIError("HTTP 500", status_code=500)))

        presenter.run_search(presenter.begin_search("salad"))

        assert not presenter.is_loading
        assert presenter.error == "HTTP 500"

    def test_superseded_run_is_discarded(self):
        presenter = RandomPresenter(pool_builder=Mock(return_value=make_pool(4)), randrange=lambda n: 0)
        first = presenter.begin_search("salad")
        presenter.begin_search("pasta")

        presenter.run_search(first)

        assert presenter.is_loading
        assert presenter.pool == []

    def test_begin_search_marks_mounted(self):
        """Test that a search started before mount() stops mount() from searching again."""
        builder = Mock(return_value=make_pool(1))
        presenter = RandomPresenter(pool_builder=builder)
        assert not presenter.mounted

        presenter.run_search(presenter.begin_search("salad"))

        assert presenter.mounted
        assert presenter.mount() is False
        assert builder.call_count == 1


class TestMount:
    """Test cases for the initial automatic search."""

    def test_mount_searches_default_query_once(self):
        builder = Mock(return_value=make_pool(3))
        presenter = RandomPresenter(pool_builder=builder, default_query="quinoa")

        assert presenter.mount() is True
        assert presenter.mount() is False

        builder.assert_called_once_with("quinoa")


class TestShuffle:
    """Test cases for RandomPresenter.shuffle."""

    def _ready_presenter(self, size, first_index, *draws):
        presenter = RandomPresenter(
            pool_builder=Mock(return_value=make_pool(size)),
            randrange=scripted_randrange(first_index, *draws),
        )
        presenter.search("salad")
        assert presenter.index == first_index
        return presenter

    def test_shuffle_uses_new_draw(self):
        presenter = self._ready_presenter(10, 2, 5)

        presenter.shuffle()

        assert presenter.index == 5

    def test_repeat_draw_advances_by_one(self):
        """Test that drawing the current index moves to the next position."""
        presenter = self._ready_presenter(10, 4, 4)

        presenter.shuffle()

        assert presenter.index == 5

    def test_repeat_draw_wraps_around(self):
        presenter = self._ready_presenter(10, 9, 9)

        presenter.shuffle()

        assert presenter.index == 0

    @pytest.mark.parametrize("size", [2, 3, 7])
    def test_never_repeats_for_any_draw(self, size):
        """Test every (current, draw) pair: shuffle never yields the previous index."""
        for current in range(size):
            for draw in range(size):
                presenter = self._ready_presenter(size, current, draw)
                presenter.shuffle()
                assert presenter.index != current
                assert 0 <= presenter.index < size

    def test_never_repeats_with_real_random(self):
        presenter = RandomPresenter(pool_builder=Mock(return_value=make_pool(2)))
        presenter.search("salad")

        for _ in range(50):
            previous = presenter.index
            presenter.shuffle()
            assert presenter.index != previous

    def test_single_recipe_pool_stays_at_zero(self):
        presenter = self._ready_presenter(1, 0, 0)

        presenter.shuffle()

        assert presenter.index == 0

    def test_empty_pool_is_noop(self):
        """Test that shuffle on an empty pool changes nothing and draws nothing."""
        randrange = Mock()
        presenter = RandomPresenter(pool_builder=Mock(), randrange=randrange)

        presenter.shuffle()

        randrange.assert_not_called()
        assert presenter.pool == []
        assert presenter.index == 0

    def test_shuffle_does_not_fetch(self):
        builder = Mock(return_value=make_pool(5))
        presenter = RandomPresenter(pool_builder=builder, randrange=scripted_randrange(0, 1, 2, 3))
        presenter.search("salad")

        presenter.shuffle()
        presenter.shuffle()

        assert builder.call_count == 1


class TestOverlappingSearches:
    """Test cases for superseded searches: the latest search wins."""

    def test_stale_completion_is_discarded(self):
        presenter = RandomPresenter(pool_builder=Mock(), randrange=lambda n: 0)
        first = presenter.begin_search("salad")
        second = presenter.begin_search("pasta")

        assert presenter.complete_search(second, make_pool(2)) is True
        assert presenter.complete_search(first, make_pool(9)) is False

        assert presenter.pool_size == 2
        assert presenter.state is FetchState.READY

    def test_stale_failure_is_discarded(self):
        presenter = RandomPresenter(pool_builder=Mock(), randrange=lambda n: 0)
        first = presenter.begin_search("salad")
        second = presenter.begin_search("pasta")
        presenter.complete_search(second, make_pool(3))

        assert presenter.fail_search(first, "HTTP 500") is False

        assert presenter.state is FetchState.READY
        assert presenter.error is None

    def test_older_result_arriving_first_does_not_apply(self):
        presenter = RandomPresenter(pool_builder=Mock(), randrange=lambda n: 0)
        first = presenter.begin_search("salad")
        presenter.begin_search("pasta")

        presenter.complete_search(first, make_pool(9))

        assert presenter.state is FetchState.LOADING
        assert presenter.pool == []
        assert presenter.query == "pasta"


class TestScenarios:
    """End-to-end scenarios through build_pool with a mocked HTTP session."""

    @staticmethod
    def _response(status, body=None):
        response = Mock()
        response.status_code = status
        response.json.return_value = body or {}
        return response

    def _presenter(self, config, session, randrange=None):
        connector = EdamamConnector(config, session=session)
        return RandomPresenter(
            pool_builder=lambda q: build_pool(q, config, connector=connector),
            randrange=randrange,
        )

    def test_salad_two_pages_of_fifty(self):
        config = EdamamConfig(app_id="id", app_key="key")
        page = lambda n, nxt: {
            "hits": [{"recipe": {"label": f"Salad {n}-{i}"}} for i in range(50)],
            **({"_links": {"next": {"href": "https://next"}}} if nxt else {}),
        }
        session = Mock()
        session.get.side_effect = [self._response(200, page(0, True)), self._response(200, page(1, False))]
        presenter = self._presenter(config, session)

        presenter.search("salad")

        assert session.get.call_count == 2
        assert presenter.pool_size == 100
        assert 0 <= presenter.index < 100
        assert presenter.state is FetchState.READY

    def test_missing_credentials(self):
        session = Mock()
        presenter = self._presenter(EdamamConfig(), session)
        previous = make_pool(2)
        presenter.pool = previous

        presenter.search("salad")

        session.get.assert_not_called()
        assert "EDAMAM_APP_ID" in presenter.error
        assert "EDAMAM_APP_KEY" in presenter.error
        assert presenter.pool == previous

    def test_first_page_429(self):
        config = EdamamConfig(app_id="id", app_key="key")
        session = Mock()
        session.get.return_value = self._response(429)
        presenter = self._presenter(config, session)
        previous = make_pool(3)
        presenter.pool = previous

        presenter.search("salad")

        assert session.get.call_count == 1
        assert "429" in presenter.error
        assert presenter.pool == previous
        assert not presenter.is_loading

    def test_all_recipes_null(self):
        config = EdamamConfig(app_id="id", app_key="key")
        session = Mock()
        session.get.return_value = self._response(200, {"hits": [{"recipe": None}, {"recipe": None}]})
        presenter = self._presenter(config, session)
        presenter.pool = make_pool(3)

        presenter.search("salad")

        assert presenter.error == NO_RESULTS_MESSAGE
        assert presenter.pool == []
