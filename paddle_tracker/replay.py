"""
Replay a recorded fix log through a WorkoutSession and export the result.

Refeeds the recorded fixes (and optional start/pause/lap/reset commands)
with deterministic timing, so filter thresholds and split settings can be
tuned against real water sessions without going back out on the water.

Session file (.json or .json.gz):
    {
      "fixes": [{"timestamp": 0.0, "latitude": 41.0, "longitude": 29.0,
                 "accuracy": 5.0, "speed": 2.1}, ...],
      "commands": [{"timestamp": 0.0, "command": "start"},
                   {"timestamp": 300.0, "command": "lap"}, ...]
    }

Without commands the session is started at the first fix and kept running.
"""

from __future__ import annotations

import argparse
import gzip
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import orjson

from .formatting import format_distance, format_elapsed, format_pace
from .models import FilterConfig, Fix
from .splits import summarize_splits
from .workout import WorkoutSession

logger = logging.getLogger(__name__)

COMMANDS = ('start', 'pause', 'lap', 'reset', 'split_interval')


@dataclass
class ReplayEvent:
    timestamp: float
    kind: str
    payload: Dict


class ReplayClock:
    """Clock the session reads instead of wall time."""

    def __init__(self) -> None:
        self._value = 0.0

    def set(self, value: float) -> None:
        self._value = value

    def now(self) -> float:
        return self._value


def load_session(path: Path) -> Dict:
    opener = gzip.open if path.suffix == ".gz" else open
    with opener(path, "rb") as handle:
        return orjson.loads(handle.read())


def fix_from_sample(sample: Dict) -> Fix:
    def pick(*keys, default=-1.0):
        for key in keys:
            if sample.get(key) is not None:
                return float(sample[key])
        return default

    return Fix(
        latitude=pick("latitude", "lat", default=float("nan")),
        longitude=pick("longitude", "lon", default=float("nan")),
        horizontal_accuracy_m=pick("accuracy", "horizontal_accuracy_m"),
        speed_mps=pick("speed", "speed_mps"),
        timestamp=float(sample["timestamp"]),
    )


def build_events(data: Dict) -> List[ReplayEvent]:
    events: List[ReplayEvent] = []

    for sample in data.get("fixes") or data.get("gps_samples") or []:
        if sample.get("timestamp") is None:
            continue
        events.append(ReplayEvent(float(sample["timestamp"]), "fix", sample))

    if not events:
        raise RuntimeError("Session has no fixes to replay")

    commands = data.get("commands") or []
    for command in commands:
        name = command.get("command")
        if name not in COMMANDS:
            raise ValueError(f"Unknown command {name!r}. Use {', '.join(COMMANDS)}")
        events.append(ReplayEvent(float(command["timestamp"]), name, command))

    if not commands:
        first = min(ev.timestamp for ev in events)
        events.append(ReplayEvent(first, "start", {}))

    # Commands before fixes that share a timestamp
    events.sort(key=lambda ev: (ev.timestamp, ev.kind == "fix"))
    return events


def replay_session(
    data: Dict,
    config: Optional[FilterConfig] = None,
    distance: str = "haversine",
) -> Dict:
    """
    Feed a recorded session through a fresh WorkoutSession.

    Returns:
        dict: 'snapshot' (WorkoutSnapshot), 'track' (per-fix metrics),
              'rejections' (reason -> count)
    """
    clock = ReplayClock()
    session = WorkoutSession(config, clock=clock.now, distance=distance)
    track: List[Dict] = []
    rejections: Dict[str, int] = {}

    events = build_events(data)
    logger.debug("replaying %d events", len(events))

    for event in events:
        clock.set(event.timestamp)
        if event.kind == "fix":
            verdict = session.on_fix(fix_from_sample(event.payload))
            if not verdict.accepted:
                key = verdict.reason.value
                rejections[key] = rejections.get(key, 0) + 1
                continue
            metrics = session.metrics()
            metrics["timestamp"] = event.timestamp
            track.append(metrics)
        elif event.kind == "start":
            session.start()
        elif event.kind == "pause":
            session.pause()
        elif event.kind == "lap":
            session.add_lap_boundary()
        elif event.kind == "reset":
            session.reset()
        elif event.kind == "split_interval":
            session.set_split_interval(float(event.payload["value"]))
        session.tick()

    return {
        "snapshot": session.snapshot(),
        "track": track,
        "rejections": rejections,
    }


def write_report(result: Dict, output_path: Path) -> None:
    snapshot = result["snapshot"]
    report = snapshot.to_dict()
    report["split_summary"] = summarize_splits(snapshot.splits)
    report["rejections"] = result["rejections"]
    output_path.write_bytes(orjson.dumps(report, option=orjson.OPT_INDENT_2))


def write_plot(track: List[Dict], output_path: Path) -> None:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    times = [point["elapsed_s"] for point in track]
    fig, (ax_speed, ax_dist) = plt.subplots(2, 1, figsize=(12, 8), sharex=True)
    ax_speed.plot(times, [p["gps_speed_kmh"] for p in track], c="red", alpha=0.3, label="GPS speed")
    ax_speed.plot(times, [p["smoothed_speed_kmh"] for p in track], c="blue", linewidth=2, label="Smoothed speed")
    ax_speed.set_ylabel("Speed (km/h)")
    ax_speed.legend()
    ax_speed.grid(True)

    ax_dist.plot(times, [p["total_distance_m"] for p in track], c="green", linewidth=2)
    ax_dist.set_xlabel("Elapsed (s)")
    ax_dist.set_ylabel("Distance (m)")
    ax_dist.grid(True)

    fig.tight_layout()
    fig.savefig(output_path)
    plt.close(fig)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument(
        "session",
        type=Path,
        help="Path to a recorded session .json[.gz] file",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Report path (defaults to <session>_replay.json)",
    )
    parser.add_argument("--split-interval", type=float, default=500.0, help="Split length in meters (default 500)")
    parser.add_argument("--max-accuracy", type=float, default=50.0, help="Drop fixes less accurate than this (m)")
    parser.add_argument("--min-delta", type=float, default=2.0, help="Displacement counted even when slow (m)")
    parser.add_argument(
        "--distance",
        choices=("haversine", "equirectangular"),
        default="haversine",
        help="Distance model between fixes",
    )
    parser.add_argument("--plot", type=Path, help="Optional PNG with speed and distance over time")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every rejected and accepted fix")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = FilterConfig(
        max_accuracy_m=args.max_accuracy,
        min_delta_m=args.min_delta,
        split_interval_m=args.split_interval,
    )
    data = load_session(args.session)
    result = replay_session(data, config, distance=args.distance)

    output = args.output or args.session.with_name(args.session.name.split(".")[0] + "_replay.json")
    write_report(result, output)

    snapshot = result["snapshot"]
    pace = 500.0 * snapshot.duration_s / snapshot.distance_m if snapshot.distance_m > 0 else 0.0
    print(f"✓ Replayed {len(result['track'])} accepted fixes")
    print(f"   Distance: {format_distance(snapshot.distance_m)} in {format_elapsed(snapshot.duration_s)}")
    print(f"   Pace: {format_pace(pace)} /500m, {len(snapshot.splits)} splits, {len(snapshot.laps)} laps")
    if result["rejections"]:
        dropped = ", ".join(f"{reason}={count}" for reason, count in sorted(result["rejections"].items()))
        print(f"⚠ Dropped fixes: {dropped}")

    if args.plot:
        if result["track"]:
            write_plot(result["track"], args.plot)
            print(f"✓ Plot saved to {args.plot}")
        else:
            print("⚠ No accepted fixes; skipping plot")

    print(f"✓ Report saved to {output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
