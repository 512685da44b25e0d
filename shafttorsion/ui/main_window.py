from __future__ import annotations
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QSplitter, QTableWidget, QTableWidgetItem,
    QComboBox, QPushButton, QPlainTextEdit, QMessageBox, QFileDialog, QHeaderView,
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QFont, QKeySequence

import logging
from typing import Dict, List, Optional

from .. import __version__
from ..core.constants import SHAPE_LABELS
from ..core.model import DegenerateGeometryError, InvalidShapeError, MalformedInputError, Section, Shaft
from ..core.project_io import ShaftFileError, load_shaft_json, save_shaft_json
from ..core.report_export import build_text_report, export_standard_report_html
from ..core.export_results import ResultExportError, export_results_bundle_zip
from ..core.torsion import ShaftResult, TorsionSolverError, solve_shaft
from .results_view import RESULT_TYPES, ResultsView
from .section_rows import COLUMNS, HEADERS, row_from_section, section_from_row

logger = logging.getLogger(__name__)

_DEFAULT_ROW = {
    "shape": "circle", "dim1": "5", "dim2": "", "length": "1.0",
    "shear_modulus": "8e10", "start_moment": "1000", "end_moment": "500",
}


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle(f"Shaft Torsion v{__version__}")
        self.resize(1200, 760)
        self.last_results: Optional[ShaftResult] = None
        self.last_shaft: Optional[Shaft] = None

        self._build_ui()
        self._build_actions()
        self.add_row(_DEFAULT_ROW)

    # ---------------- UI ----------------
    def _build_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        lay = QVBoxLayout(central)

        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels(HEADERS)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)

        btns = QHBoxLayout()
        self.btn_add = QPushButton("Add section")
        self.btn_remove = QPushButton("Remove section")
        self.btn_solve = QPushButton("Solve")
        for b in (self.btn_add, self.btn_remove, self.btn_solve):
            btns.addWidget(b)
        btns.addStretch(1)
        self.cmb_result = QComboBox()
        self.cmb_result.addItems(list(RESULT_TYPES))
        btns.addWidget(self.cmb_result)

        self.report = QPlainTextEdit()
        self.report.setReadOnly(True)
        self.report.setFont(QFont("Courier New", 10))
        self.results_view = ResultsView()

        bottom = QSplitter(Qt.Orientation.Horizontal)
        bottom.addWidget(self.report)
        bottom.addWidget(self.results_view)

        split = QSplitter(Qt.Orientation.Vertical)
        top = QWidget()
        top_lay = QVBoxLayout(top)
        top_lay.setContentsMargins(0, 0, 0, 0)
        top_lay.addWidget(self.table)
        top_lay.addLayout(btns)
        split.addWidget(top)
        split.addWidget(bottom)
        lay.addWidget(split)

        self.btn_add.clicked.connect(lambda: self.add_row(_DEFAULT_ROW))
        self.btn_remove.clicked.connect(self.remove_row)
        self.btn_solve.clicked.connect(self.solve)
        self.cmb_result.currentTextChanged.connect(self._refresh_plot)

    def _build_actions(self):
        m = self.menuBar().addMenu("File")
        for text, key, slot in (
            ("Open shaft...", QKeySequence.StandardKey.Open, self.open_shaft),
            ("Save shaft...", QKeySequence.StandardKey.Save, self.save_shaft),
            ("Export HTML report...", None, self.export_html),
            ("Export results bundle...", None, self.export_bundle),
        ):
            act = QAction(text, self)
            if key is not None:
                act.setShortcut(key)
            act.triggered.connect(slot)
            m.addAction(act)

    # ---------------- Table ----------------
    def add_row(self, values: Dict[str, str]):
        r = self.table.rowCount()
        self.table.insertRow(r)
        cmb = QComboBox()
        cmb.addItems(list(SHAPE_LABELS))
        cmb.setCurrentText(values.get("shape", "circle"))
        self.table.setCellWidget(r, 0, cmb)
        for c, key in enumerate(COLUMNS[1:], start=1):
            self.table.setItem(r, c, QTableWidgetItem(values.get(key, "")))

    def remove_row(self):
        r = self.table.currentRow()
        if r < 0:
            r = self.table.rowCount() - 1
        if r >= 0:
            self.table.removeRow(r)

    def _row_values(self, r: int) -> Dict[str, str]:
        values = {"shape": self.table.cellWidget(r, 0).currentText()}
        for c, key in enumerate(COLUMNS[1:], start=1):
            item = self.table.item(r, c)
            values[key] = item.text() if item is not None else ""
        return values

    def shaft_from_table(self) -> Shaft:
        sections: List[Section] = []
        for r in range(self.table.rowCount()):
            try:
                sections.append(section_from_row(self._row_values(r)))
            except (InvalidShapeError, MalformedInputError, DegenerateGeometryError) as exc:
                raise MalformedInputError(f"row {r + 1}: {exc}") from exc
        return Shaft(sections=tuple(sections))

    def load_into_table(self, shaft: Shaft):
        self.table.setRowCount(0)
        for s in shaft:
            self.add_row(row_from_section(s))

    # ---------------- Solve ----------------
    def solve(self):
        try:
            shaft = self.shaft_from_table()
            out = solve_shaft(shaft)
        except (MalformedInputError, TorsionSolverError) as exc:
            logger.error("Solve failed: %s", exc)
            QMessageBox.critical(self, "Cannot Solve", str(exc))
            return
        self.last_shaft, self.last_results = shaft, out
        text = build_text_report(out)
        warns = [f"[{m.level}] {m.text}" for m in out.messages]
        if warns:
            text += "\n" + "\n".join(warns) + "\n"
        self.report.setPlainText(text)
        self._refresh_plot()
        self.statusBar().showMessage(f"Solved {out.section_count} section(s)", 6000)

    def _refresh_plot(self, *_):
        if self.last_results is None:
            self.results_view.clear()
            return
        self.results_view.set_data(self.last_results, self.cmb_result.currentText())

    # ---------------- Files ----------------
    def open_shaft(self):
        fn, _ = QFileDialog.getOpenFileName(self, "Open Shaft", "", "Shaft Files (*.json)")
        if not fn:
            return
        try:
            shaft = load_shaft_json(fn)
        except (ShaftFileError, InvalidShapeError) as exc:
            logger.exception("Failed to open shaft file")
            QMessageBox.critical(self, "Open Error", str(exc))
            return
        self.load_into_table(shaft)
        self.last_results = None
        self._refresh_plot()

    def save_shaft(self):
        try:
            shaft = self.shaft_from_table()
        except MalformedInputError as exc:
            QMessageBox.critical(self, "Save Error", str(exc))
            return
        fn, _ = QFileDialog.getSaveFileName(self, "Save Shaft", "shaft.json", "Shaft Files (*.json)")
        if not fn:
            return
        try:
            save_shaft_json(shaft, fn)
        except ShaftFileError as exc:
            logger.exception("Failed to save shaft file")
            QMessageBox.critical(self, "Save Error", str(exc))
            return
        self.statusBar().showMessage(f"Saved {fn}", 6000)

    def export_html(self):
        if self.last_results is None or self.last_shaft is None:
            QMessageBox.information(self, "Export", "Solve first.")
            return
        fn, _ = QFileDialog.getSaveFileName(self, "Export HTML Report", "report.html", "HTML Files (*.html)")
        if not fn:
            return
        try:
            export_standard_report_html(self.last_shaft, self.last_results, fn)
        except OSError as exc:
            logger.exception("HTML export failed")
            QMessageBox.critical(self, "Export Error", str(exc))
            return
        self.statusBar().showMessage(f"Report written to {fn}", 6000)

    def export_bundle(self):
        if self.last_results is None or self.last_shaft is None:
            QMessageBox.information(self, "Export", "Solve first.")
            return
        fn, _ = QFileDialog.getSaveFileName(self, "Export Results Bundle", "results.zip", "Zip Files (*.zip)")
        if not fn:
            return
        try:
            export_results_bundle_zip(self.last_shaft, self.last_results, fn)
        except (OSError, ResultExportError) as exc:
            logger.exception("Bundle export failed")
            QMessageBox.critical(self, "Export Error", str(exc))
            return
        self.statusBar().showMessage(f"Bundle written to {fn}", 6000)
