"""Campaign rollup entrypoint."""

from __future__ import annotations

from campaign_rollup.application import run_rollup_pipeline


def main() -> None:
    run_rollup_pipeline()


if __name__ == "__main__":
    main()
