"""CLI for the vestmon canine vitals monitor."""

import asyncio
import logging

import click

from vestmon.calibration import BREEDS, ConfigurationError, Size
from vestmon.session import AccelMode, Frame, MonitorSession, PPGMode, TemperatureMode

SIZE_CHOICES = [s.value for s in Size]


def format_frame(frame: Frame) -> str:
    """One status line for the text display."""
    if frame.temperature is not None:
        t = frame.temperature
        temp = (f"{t.average:.1f}°F ({t.probe1:.1f}/{t.probe2:.1f}, Δ{t.delta:.1f}) "
                f"[{frame.temperature_status.label}]")
    else:
        temp = "--"
    if frame.heart_rate is not None:
        hr = f"{frame.heart_rate:.0f} BPM [{frame.heart_rate_status.label}]"
    else:
        hr = "--"
    ppg = f"{frame.ppg_raw}" if frame.ppg_raw is not None else "--"
    mag = f"{frame.accel.magnitude:.3f}g" if frame.accel is not None else "--"
    return (f"{frame.activity_label:<8} | Temp {temp} | HR {hr} | PPG {ppg} "
            f"| Accel {mag} {frame.movement_status}")


def _configure_session(
    session: MonitorSession,
    breed: str,
    size: str | None,
    age: float,
    weight: float | None,
) -> None:
    if size is None and breed.lower() in BREEDS:
        size = BREEDS[breed.lower()].size.value
    try:
        update = session.set_subject_calibration(breed, size or "", age, weight)
    except ConfigurationError as e:
        raise click.BadParameter(str(e), param_hint=f"--{e.field.replace('_years', '')}")
    click.echo("Health ranges:")
    for name, text in update.display.items():
        click.echo(f"  {name:<12} {text}")


def _subject_options(fn):
    fn = click.option("--weight", "-w", default=None, type=float, help="Weight (informational).")(fn)
    fn = click.option("--age", default=5.0, type=float, help="Age in years.")(fn)
    fn = click.option("--size", "-s", default=None, type=click.Choice(SIZE_CHOICES),
                      help="Size class (default: the breed's typical size).")(fn)
    fn = click.option("--breed", "-b", default="labrador", help="Breed key (see `vestmon breeds`).")(fn)
    return fn


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """vestmon — canine vitals vest monitor."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.option("--timeout", "-t", default=10.0, help="Scan timeout in seconds.")
def scan(timeout: float) -> None:
    """Scan for nearby vests."""
    from vestmon.scanner import scan as do_scan

    asyncio.run(do_scan(timeout))


@main.command()
def breeds() -> None:
    """List supported breeds."""
    click.echo(f"{'breed':<18} {'size':<8} {'base HR':>7} {'temp adj':>8}")
    for name, info in BREEDS.items():
        click.echo(f"{name:<18} {info.size.value:<8} {info.base_hr:>7} {info.temp_adjust:>+8.1f}")


@main.command()
@_subject_options
def ranges(breed: str, size: str | None, age: float, weight: float | None) -> None:
    """Show the health ranges for a subject."""
    _configure_session(MonitorSession(), breed, size, age, weight)


@main.command()
@_subject_options
@click.option("--duration", "-d", default=10.0, help="Run time in seconds.")
@click.option("--temp-mode", type=click.Choice([m.value for m in TemperatureMode]), default="auto")
@click.option("--ppg-mode", type=click.Choice([m.value for m in PPGMode]), default="auto")
@click.option("--accel-mode", type=click.Choice([m.value for m in AccelMode]), default="rest",
              help="Accelerometer preset (auto waits for a live vest).")
@click.option("--activity", type=click.Choice(["rest", "active"]), default=None,
              help="Force the activity state.")
@click.option("--no-auto-detect", is_flag=True, help="Disable automatic activity detection.")
@click.option("--seed", default=None, type=int, help="Random seed for the synthesizers.")
@click.option("--json", "as_json", is_flag=True, help="Print frames as JSON lines.")
def demo(
    breed: str,
    size: str | None,
    age: float,
    weight: float | None,
    duration: float,
    temp_mode: str,
    ppg_mode: str,
    accel_mode: str,
    activity: str | None,
    no_auto_detect: bool,
    seed: int | None,
    as_json: bool,
) -> None:
    """Run the monitor on simulated signals."""
    import numpy as np

    from vestmon.monitor import run_monitor

    session = MonitorSession(rng=np.random.default_rng(seed))
    _configure_session(session, breed, size, age, weight)
    session.set_auto_detection(not no_auto_detect)
    for change in (
        session.set_temperature_mode(temp_mode),
        session.set_ppg_mode(ppg_mode),
        session.set_accel_mode(accel_mode),
    ):
        click.echo(f"{change.signal.value:<12} {change.indicator}")
    if activity is not None:
        session.set_activity_state(activity)
    click.echo("")

    def _sink(frame: Frame) -> None:
        click.echo(frame.to_json(indent=None) if as_json else format_frame(frame))

    try:
        asyncio.run(run_monitor(session, duration, sink=_sink))
    except KeyboardInterrupt:
        click.echo("\nStopped.")


@main.command()
@_subject_options
@click.option("--address", "-a", default=None, help="BLE address to connect to.")
@click.option("--duration", "-d", default=None, type=float, help="Run time in seconds.")
@click.option("--output", "-o", default=None, help="Append raw notifications to this JSONL file.")
def stream(
    breed: str,
    size: str | None,
    age: float,
    weight: float | None,
    address: str | None,
    duration: float | None,
    output: str | None,
) -> None:
    """Monitor a live vest (accelerometer live, other signals simulated)."""
    from vestmon.live import VestLink, open_capture
    from vestmon.monitor import run_monitor

    session = MonitorSession()
    _configure_session(session, breed, size, age, weight)
    session.set_accel_mode(AccelMode.AUTO)

    capture = open_capture(output)
    link = VestLink(session.live_accel, capture=capture)

    async def _stream() -> None:
        monitor = asyncio.create_task(
            run_monitor(session, None, sink=lambda f: click.echo(format_frame(f)))
        )
        try:
            await link.run(address, duration)
        finally:
            monitor.cancel()
            await asyncio.gather(monitor, return_exceptions=True)

    try:
        asyncio.run(_stream())
    except KeyboardInterrupt:
        click.echo("\nStopped.")
    finally:
        if capture is not None:
            capture.close()
            click.echo(f"Capture written to {output}")


@main.command()
@click.argument("file", type=click.Path(exists=True))
@click.option("--verbose", "-v", is_flag=True, help="Show every sample, not only state changes.")
def replay(file: str, verbose: bool) -> None:
    """Replay a captured notification log through the activity detector."""
    from vestmon.replay import replay_file

    records = replay_file(file, verbose=verbose)
    if records:
        active = sum(1 for r in records if r.activity.value == "active")
        click.echo(f"Active for {active}/{len(records)} samples; "
                   f"final state {records[-1].activity.label}.")


if __name__ == "__main__":
    main()
