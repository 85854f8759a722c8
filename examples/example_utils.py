from typing import Callable

from statevector import StateVector


class PlayerPanel:
    """Fake UI panel: the handlers only flip widget flags and keep a log."""

    def __init__(self) -> None:
        self.play_enabled = True
        self.pause_enabled = False
        self.stop_enabled = False
        self.status = "Stopped"
        self.log: list[str] = []

    def enable_playing_controls(self) -> None:
        self.play_enabled = False
        self.pause_enabled = True
        self.stop_enabled = True
        self.log.append("playing controls")

    def enable_paused_controls(self) -> None:
        self.play_enabled = True
        self.pause_enabled = False
        self.log.append("paused controls")

    def enable_stopped_controls(self) -> None:
        self.play_enabled = True
        self.pause_enabled = False
        self.stop_enabled = False
        self.log.append("stopped controls")

    def show_status(self, status: str) -> None:
        self.status = status
        self.log.append(f"status {status}")


def main(build: Callable[[PlayerPanel], StateVector]) -> None:
    panel = PlayerPanel()
    player = build(panel)

    assert player.current_state == "Stopped"
    assert player.previous_state is None

    player.refresh("Playing")
    assert (panel.play_enabled, panel.pause_enabled, panel.stop_enabled) == (
        False,
        True,
        True,
    )
    assert panel.status == "Playing"

    player.refresh("Paused")
    assert panel.play_enabled and not panel.pause_enabled
    assert panel.status == "Paused"
    assert player.previous_state == "Playing"

    player.refresh("Playing")
    player.refresh("Stopped")
    assert (panel.play_enabled, panel.pause_enabled, panel.stop_enabled) == (
        True,
        False,
        False,
    )
    assert panel.status == "Stopped"

    # Nothing is registered for Stopped -> Paused: the state still moves
    log_size = len(panel.log)
    player.refresh("Paused")
    assert len(panel.log) == log_size
    assert player.current_state == "Paused"
    assert player.previous_state == "Stopped"
