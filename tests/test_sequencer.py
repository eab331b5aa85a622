"""Tests for the playback sequencer."""

from playdeck.models.library import Track
from playdeck.models.playlist import TrackList
from playdeck.services.sequencer import PlaybackSequencer


def _tick(seq: PlaybackSequencer, n: int) -> None:
    for _ in range(n):
        seq.tick()


class TestIdle:
    """Tests for the initial / stopped state."""

    def test_starts_idle(self):
        state = PlaybackSequencer().get_state()
        assert state.activeTrack is None
        assert state.isAdvancing is False
        assert state.elapsedSeconds == 0
        assert state.activeList is None
        assert state.activeIndex == -1
        assert state.hasNext is False
        assert state.hasPrevious is False

    def test_ticks_ignored_while_idle(self):
        seq = PlaybackSequencer()
        assert seq.tick() is False
        assert seq.get_state().is_idle

    def test_toggle_while_idle_is_noop(self):
        seq = PlaybackSequencer()
        before = seq.get_state()
        seq.toggle_play_pause()
        assert seq.get_state() == before

    def test_stop_is_idempotent(self, track_a: Track):
        seq = PlaybackSequencer()
        seq.play_track(track_a)
        seq.stop()
        first = seq.get_state()
        seq.stop()
        second = seq.get_state()
        assert first.model_dump(exclude={"session"}) == second.model_dump(exclude={"session"})
        assert second.is_idle


class TestPlayTrack:
    """Tests for play_track / play_list."""

    def test_play_track_without_list(self, track_a: Track):
        seq = PlaybackSequencer()
        seq.play_track(track_a)
        state = seq.get_state()
        assert state.activeTrack == track_a
        assert state.isAdvancing is True
        assert state.elapsedSeconds == 0
        assert state.activeList is None
        assert state.activeIndex == -1

    def test_play_track_in_list_sets_index(self, track_b: Track, two_track_list: TrackList):
        seq = PlaybackSequencer()
        seq.play_track(track_b, two_track_list)
        state = seq.get_state()
        assert state.activeIndex == 1
        assert state.activeList == two_track_list
        assert state.hasPrevious is True
        assert state.hasNext is False

    def test_track_missing_from_its_list(self, two_track_list: TrackList):
        stranger = Track(id=99, title="X", artist="Y", durationSeconds=10)
        seq = PlaybackSequencer()
        seq.play_track(stranger, two_track_list)
        state = seq.get_state()
        assert state.activeList == two_track_list
        assert state.activeIndex == -1
        assert state.hasNext is False
        assert state.hasPrevious is False

    def test_play_track_abandons_progress(self, track_a: Track, track_b: Track):
        seq = PlaybackSequencer()
        seq.play_track(track_a)
        _tick(seq, 5)
        seq.play_track(track_b)
        assert seq.get_state().elapsedSeconds == 0
        assert seq.get_state().activeTrack == track_b

    def test_play_list_starts_at_first_track(self, track_a: Track, two_track_list: TrackList):
        seq = PlaybackSequencer()
        seq.play_list(two_track_list)
        state = seq.get_state()
        assert state.activeTrack == track_a
        assert state.activeIndex == 0
        assert state.hasNext is True
        assert state.hasPrevious is False

    def test_play_empty_list_is_noop(self, track_a: Track):
        seq = PlaybackSequencer()
        seq.play_track(track_a)
        _tick(seq, 3)
        before = seq.get_state()

        seq.play_list(TrackList(id=5, name="empty", tracks=[]))

        assert seq.get_state() == before


class TestToggle:
    """Tests for pause / resume."""

    def test_double_toggle_restores_state(self, track_a: Track):
        seq = PlaybackSequencer()
        seq.play_track(track_a)
        _tick(seq, 4)
        before = seq.get_state()

        seq.toggle_play_pause()
        assert seq.get_state().isAdvancing is False
        seq.toggle_play_pause()

        assert seq.get_state() == before

    def test_ticks_ignored_while_paused(self, track_a: Track):
        seq = PlaybackSequencer()
        seq.play_track(track_a)
        _tick(seq, 2)
        seq.toggle_play_pause()
        _tick(seq, 100)
        state = seq.get_state()
        assert state.elapsedSeconds == 2
        assert state.activeTrack == track_a


class TestNavigation:
    """Tests for next / previous."""

    def test_previous_at_first_is_noop(self, two_track_list: TrackList):
        seq = PlaybackSequencer()
        seq.play_list(two_track_list)
        _tick(seq, 3)
        before = seq.get_state()
        seq.previous()
        assert seq.get_state() == before

    def test_next_at_last_stops(self, track_b: Track, two_track_list: TrackList):
        seq = PlaybackSequencer()
        seq.play_track(track_b, two_track_list)
        seq.next()
        assert seq.get_state().is_idle

    def test_next_without_list_stops(self, track_a: Track):
        seq = PlaybackSequencer()
        seq.play_track(track_a)
        seq.next()
        assert seq.get_state().is_idle

    def test_next_from_paused_resumes(self, track_b: Track, two_track_list: TrackList):
        seq = PlaybackSequencer()
        seq.play_list(two_track_list)
        seq.toggle_play_pause()
        seq.next()
        state = seq.get_state()
        assert state.activeTrack == track_b
        assert state.activeIndex == 1
        assert state.isAdvancing is True

    def test_previous_moves_back(self, track_a: Track, track_b: Track, two_track_list: TrackList):
        seq = PlaybackSequencer()
        seq.play_track(track_b, two_track_list)
        _tick(seq, 7)
        seq.previous()
        state = seq.get_state()
        assert state.activeTrack == track_a
        assert state.activeIndex == 0
        assert state.elapsedSeconds == 0
        assert state.activeList == two_track_list


class TestTick:
    """Tests for clock-driven progress."""

    def test_runs_to_end_without_list(self, track_a: Track):
        seq = PlaybackSequencer()
        seq.play_track(track_a)

        _tick(seq, track_a.durationSeconds - 1)
        state = seq.get_state()
        assert state.elapsedSeconds == track_a.durationSeconds - 1
        assert state.isAdvancing is True

        seq.tick()
        assert seq.get_state().is_idle

    def test_list_scenario(self, track_a: Track, track_b: Track, two_track_list: TrackList):
        seq = PlaybackSequencer()
        seq.play_list(two_track_list)

        _tick(seq, 30)
        state = seq.get_state()
        assert state.activeTrack == track_b
        assert state.activeIndex == 1
        assert state.elapsedSeconds == 0
        assert state.hasNext is False
        assert state.hasPrevious is True

        _tick(seq, 45)
        assert seq.get_state().is_idle

    def test_zero_duration_finishes_on_first_tick(self):
        seq = PlaybackSequencer()
        seq.play_track(Track(id=3, title="silence", artist="none", durationSeconds=0))
        assert seq.tick() is True
        assert seq.get_state().is_idle

    def test_elapsed_never_reaches_duration(self, track_a: Track):
        seq = PlaybackSequencer()
        seq.play_track(track_a)
        for _ in range(track_a.durationSeconds - 1):
            seq.tick()
            assert seq.get_state().elapsedSeconds < track_a.durationSeconds


class TestSession:
    """Tests for stale tick invalidation."""

    def test_play_and_stop_bump_session(self, track_a: Track):
        seq = PlaybackSequencer()
        s0 = seq.session
        seq.play_track(track_a)
        s1 = seq.session
        seq.stop()
        assert s0 < s1 < seq.session

    def test_toggle_keeps_session(self, track_a: Track):
        seq = PlaybackSequencer()
        seq.play_track(track_a)
        session = seq.session
        seq.toggle_play_pause()
        seq.toggle_play_pause()
        assert seq.session == session

    def test_stale_tick_does_not_touch_new_track(self, track_a: Track, track_b: Track):
        seq = PlaybackSequencer()
        seq.play_track(track_a)
        scheduled_for_a = seq.session

        seq.play_track(track_b)

        assert seq.tick(scheduled_for_a) is False
        state = seq.get_state()
        assert state.activeTrack == track_b
        assert state.elapsedSeconds == 0

    def test_stale_tick_does_not_auto_advance(self, track_a: Track, two_track_list: TrackList):
        short = Track(id=7, title="short", artist="s", durationSeconds=1)
        seq = PlaybackSequencer()
        seq.play_track(track_a)
        stale = seq.session

        seq.play_track(short)
        seq.tick(stale)

        assert seq.get_state().activeTrack == short

    def test_current_session_tick_applies(self, track_a: Track):
        seq = PlaybackSequencer()
        seq.play_track(track_a)
        assert seq.tick(seq.session) is True
        assert seq.get_state().elapsedSeconds == 1


class TestSubscribe:
    """Tests for the push interface."""

    def test_listener_receives_snapshots(self, track_a: Track):
        seq = PlaybackSequencer()
        seen = []
        seq.subscribe(seen.append)

        seq.play_track(track_a)
        seq.tick()
        seq.stop()

        assert [s.elapsedSeconds for s in seen] == [0, 1, 0]
        assert seen[-1].is_idle

    def test_unsubscribe(self, track_a: Track):
        seq = PlaybackSequencer()
        seen = []
        unsubscribe = seq.subscribe(seen.append)
        unsubscribe()
        seq.play_track(track_a)
        assert seen == []

    def test_failing_listener_does_not_break_playback(self, track_a: Track):
        seq = PlaybackSequencer()

        def boom(_state):
            raise RuntimeError("listener failure")

        seq.subscribe(boom)
        seq.play_track(track_a)
        seq.tick()
        assert seq.get_state().elapsedSeconds == 1

    def test_empty_play_list_notifies_nobody(self):
        seq = PlaybackSequencer()
        seen = []
        seq.subscribe(seen.append)
        seq.play_list(TrackList(id=1, name="empty"))
        assert seen == []
