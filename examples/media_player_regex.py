import functools
import logging

from example_utils import PlayerPanel, main

from statevector import StateVector, TransitionGroup


def build_player(panel: PlayerPanel) -> StateVector:
    status = TransitionGroup(
        ".", "^Playing$", functools.partial(panel.show_status, "Playing"), tag="status"
    )
    status.add(
        "^Playing$", "^Paused$", functools.partial(panel.show_status, "Paused"), tag="status"
    )
    status.add(
        "^(?!Stopped$)",
        "^Stopped$",
        functools.partial(panel.show_status, "Stopped"),
        tag="status",
    )

    # With regex matching, one pattern covers every "anything but X" edge.
    return StateVector(
        "Stopped",
        [
            TransitionGroup(
                "^(Stopped|Paused)$", "^Playing$", panel.enable_playing_controls, tag="play"
            ),
            TransitionGroup(
                "^Playing$", "^Paused$", panel.enable_paused_controls, tag="pause"
            ),
            TransitionGroup(
                "^(?!Stopped$)", "^Stopped$", panel.enable_stopped_controls, tag="stop"
            ),
            status,
        ],
        name="player-regex",
        regex=True,
        trace=True,
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(name)s | %(message)s")
    build_player(PlayerPanel()).list_info()
    main(build_player)
