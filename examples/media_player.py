import functools

from example_utils import PlayerPanel, main

from statevector import StateVector, TransitionGroup, any_of


def build_player(panel: PlayerPanel) -> StateVector:
    # Only the pairs that matter are listed, instead of a full 3x3 table.
    return StateVector(
        "Stopped",
        [
            TransitionGroup(
                any_of("Stopped", "Paused"),
                "Playing",
                panel.enable_playing_controls,
                functools.partial(panel.show_status, "Playing"),
                tag="play",
            ),
            TransitionGroup(
                "Playing",
                "Paused",
                panel.enable_paused_controls,
                functools.partial(panel.show_status, "Paused"),
                tag="pause",
            ),
            TransitionGroup(
                any_of("Playing", "Paused"),
                "Stopped",
                panel.enable_stopped_controls,
                functools.partial(panel.show_status, "Stopped"),
                tag="stop",
            ),
        ],
        name="player",
    )


if __name__ == "__main__":
    main(build_player)
