#!/usr/bin/env python3
"""
Synthetic Level Demo

Drives the meter with generated ffplay-style metadata lines, so the bar,
smoothing and peak falloff can be watched without an audio device.
Press Ctrl+C to stop.

Usage: python demo_synthetic_levels.py [duration_seconds]
"""

import sys
import time

import numpy as np


def synthetic_lines(duration, rate=30.0):
    """Yield RMS metadata lines for a pulsing tone with random bursts."""
    rng = np.random.default_rng()
    for n in range(int(duration * rate)):
        t = n / rate
        db = -20.0 + 12.0 * np.sin(2 * np.pi * 0.25 * t)
        if rng.random() < 0.05:
            db += 8.0
        token = "-inf" if db < -30.0 else f"{db:.6f}"
        yield f"lavfi.astats.Overall.RMS_level={token}\n"
        time.sleep(1.0 / rate)


def main():
    """Run the meter on synthetic input."""
    from ffvumeter import MeterConfig, MeterLoop, TerminalDisplay, TerminalMode

    duration = int(sys.argv[1]) if len(sys.argv) > 1 else 10

    print("=" * 70)
    print("  Synthetic VU Meter")
    print("=" * 70 + "\n")

    config = MeterConfig.load()
    display = TerminalDisplay(sys.stdout)
    meter = MeterLoop(config, display)

    with TerminalMode(sys.stdin):
        display.save_cursor()
        try:
            frames = meter.run(synthetic_lines(duration))
        except KeyboardInterrupt:
            frames = display.frames
            print("\n\n⚠️  Stopped by user")
        finally:
            display.finish()

    print(f"\n  Frames drawn: {frames}")
    if meter.peak_tracker is not None:
        print(f"  Final peak: {meter.peak_tracker.last_peak:.3f}")


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        print(f"\n❌ Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)
