# install_dashboard/routes/install_tracker.py
from dataclasses import asdict
from datetime import date, timedelta
from functools import partial

from flask import Blueprint, Response, current_app, jsonify, render_template, request

from install_dashboard.constants import GROUP_MODES, INSTALLERS, TECHS
from install_dashboard.services.install_demo import fetch_installs_demo
from install_dashboard.services.install_report import export_csv
from install_dashboard.services.install_tracker import InstallTracker, InstallTrackerState, today_iso

install_tracker_bp = Blueprint('install_tracker', __name__, url_prefix='/install-tracker')

EMPTY_SELECTION = "none"

# Demo sold dates reach 28 days before the install date; range walks step one day past the end.
EARLIEST_DATE = date.min + timedelta(days=28)
LATEST_DATE = date.max - timedelta(days=1)


def _iso_arg(args, name, default):
    value = args.get(name) or default
    # raises ValueError on anything that is not YYYY-MM-DD
    parsed = date.fromisoformat(value)
    if not EARLIEST_DATE <= parsed <= LATEST_DATE:
        raise ValueError(f"{name} must be between {EARLIEST_DATE.isoformat()} and {LATEST_DATE.isoformat()}")
    return parsed.isoformat()


def _selection_arg(args, name, universe):
    values = args.getlist(name)
    if not values:
        return tuple(universe)
    if values == [EMPTY_SELECTION]:
        return ()
    return tuple(v for v in universe if v in values)


def state_from_args(args, max_range_days=None):
    """Build tracker state from query parameters. Raises ValueError on bad input."""
    today = today_iso()
    group_mode = args.get("group", "tech")
    if group_mode not in GROUP_MODES:
        raise ValueError(f"group must be one of {', '.join(GROUP_MODES)}")

    state = InstallTrackerState(
        date=_iso_arg(args, "date", today),
        range_start=_iso_arg(args, "start", today),
        range_end=_iso_arg(args, "end", today),
        selected_techs=_selection_arg(args, "tech", TECHS),
        selected_installers=_selection_arg(args, "installer", INSTALLERS),
        group_mode=group_mode,
    )
    if args.get("range") in ("1", "true", "on"):
        state = state.apply_range()
        days = (date.fromisoformat(state.range_end) - date.fromisoformat(state.range_start)).days + 1
        if max_range_days and days > max_range_days:
            raise ValueError(f"date range is {days} days, the limit is {max_range_days}")
    return state


def _load_tracker():
    state = state_from_args(request.args, max_range_days=current_app.config.get("MAX_RANGE_DAYS"))
    latency = current_app.config.get("DEMO_LATENCY_SECONDS", 0.12)
    tracker = InstallTracker(fetch=partial(fetch_installs_demo, latency=latency))
    tracker.update(state)
    current_app.logger.info(
        "Install tracker loaded %s records for %s",
        len(tracker.all_data),
        f"{state.range_start}..{state.range_end}" if state.use_range else state.date,
    )
    return tracker


def _serialize_report(report):
    return {
        "groupMode": report["group_mode"],
        "rate": report["rate"],
        "groups": [
            {
                "label": g.label,
                "subtotal": g.subtotal,
                "rows": [r.to_dict() for r in g.rows],
            }
            for g in report["groups"]
        ],
        "summary": [asdict(s) for s in report["summary"]],
        "grand": asdict(report["grand"]),
    }


@install_tracker_bp.route('', methods=['GET'])
def install_tracker():
    try:
        tracker = _load_tracker()
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return render_template(
        "install_tracker.html",
        state=tracker.state,
        report=tracker.report(),
        techs=TECHS,
        installers=INSTALLERS,
    )


@install_tracker_bp.route('/data', methods=['GET'])
def install_tracker_data():
    try:
        tracker = _load_tracker()
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    body = _serialize_report(tracker.report())
    body["filename"] = tracker.state.export_filename()
    return jsonify(body)


@install_tracker_bp.route('/export.csv', methods=['GET'])
def install_tracker_export():
    try:
        tracker = _load_tracker()
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    report = tracker.report()
    csv_text = export_csv(report["groups"], report["group_mode"])
    filename = tracker.state.export_filename()
    return Response(
        csv_text,
        mimetype="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
