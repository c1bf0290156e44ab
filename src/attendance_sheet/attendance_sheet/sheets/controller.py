from __future__ import annotations

from flask import Flask, flash, jsonify, render_template, request, session

from ..container import Container
from ..core.enums import Program
from ..core.exceptions import PersistenceError
from .events import IdentityKeyChanged
from .form import IDENTITY_FIELDS, SheetForm
from .model import LoadedSheetState
from .service import describe_save_result

SESSION_SHEET_ID = "sheet_id"


def register(app: Flask, container: Container) -> None:
    def loaded_state() -> LoadedSheetState:
        return LoadedSheetState(session.get(SESSION_SHEET_ID))

    def remember(state: LoadedSheetState) -> None:
        session[SESSION_SHEET_ID] = state.sheet_id if state.is_loaded else None

    def render_sheet(form: SheetForm):
        return render_template(
            "sheet.html",
            sheet=form.to_dict(),
            programs=list(Program),
            institution_name=app.config.get("INSTITUTION_NAME", ""),
            sheet_title=app.config.get("SHEET_TITLE", ""),
        )

    @app.route("/", methods=["GET"], endpoint="sheet_form")
    def sheet_form():
        # A fresh page starts with nothing loaded.
        remember(LoadedSheetState())
        return render_sheet(SheetForm(rows=container.roster_rows))

    @app.route("/sheet/lookup", methods=["POST"], endpoint="lookup_sheet")
    def lookup_sheet():
        data = request.get_json(silent=True) or request.form
        form = SheetForm.from_mapping(data, rows=container.roster_rows)

        field = data.get("changed_field") or ""
        if field not in IDENTITY_FIELDS:
            field = "program"
        event = IdentityKeyChanged(field=field, old_value=None, new_value=data.get(field))

        try:
            state = container.lookup_service.handle(event, form, loaded_state())
        except PersistenceError as e:
            app.logger.warning("Lookup failed: %s", e)
            return jsonify({"success": False, "message": f"Database error: {e}"}), 500

        remember(state)
        return jsonify({"success": True, "loaded": state.is_loaded, "sheet": form.to_dict()})

    @app.route("/sheet/save", methods=["POST"], endpoint="save_sheet")
    def save_sheet():
        form = SheetForm.from_mapping(request.form, rows=container.roster_rows)
        try:
            result = container.sync_service.save(form)
            flash(describe_save_result(result), "success")
        except PersistenceError as e:
            app.logger.warning("Save failed: %s", e)
            flash(f"Database error: {e}", "danger")
        except Exception as e:
            app.logger.exception("Unexpected error while saving attendance sheet")
            if bool(app.config.get("DEBUG", False)):
                flash(f"System error while saving: {e}", "danger")
            else:
                flash("System error while saving", "danger")

        return render_sheet(form)
