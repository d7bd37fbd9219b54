# gui.py
import threading
import queue
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple
import json

import tkinter as tk
from tkinter import ttk, filedialog, messagebox

from foldersort.classifier import CategoryTable
from foldersort.config import read_categories
from foldersort.errors import CollectError, InvalidPathError
from foldersort.logger import get_logger, log_result
from foldersort.models import MoveStatus
from foldersort.mover import SafeMover, summarize
from foldersort.scanner import FolderScanner
from foldersort.utils import resolve_root

CONFIG_NAME = "gui_config.json"
MAX_LOG_LINES = 500  # keep widget light


class FolderSortGUI(tk.Tk):
    def __init__(self, initial_dir: str = "", initial_config: str = ""):
        super().__init__()
        self.title("Folder Sort")
        self.geometry("900x600")
        self.logger = get_logger()

        # Worker threads talk to widgets only through these queues
        self.log_q: queue.Queue[str] = queue.Queue()
        self.rows_q: queue.Queue[List[str]] = queue.Queue()
        self.status_q: queue.Queue[str] = queue.Queue()
        self.done_q: queue.Queue[bool] = queue.Queue()

        self.worker_thread: Optional[threading.Thread] = None
        self.stop_requested = False

        self._build_ui()
        self._load_config()
        if initial_dir:
            self.dir_var.set(initial_dir)
        if initial_config:
            self.config_var.set(initial_config)
        self._poll_queues()

    # ---------------- UI ----------------
    def _build_ui(self):
        frm = ttk.Frame(self, padding=10)
        frm.pack(fill="x")

        self.dir_var = tk.StringVar()
        self.config_var = tk.StringVar()
        self.subdirs_var = tk.BooleanVar(value=False)
        self.dry_run_var = tk.BooleanVar(value=True)

        self._file_picker(frm, "Folder:", self.dir_var, row=0, is_dir=True)
        self._file_picker(frm, "Categories JSON (optional):", self.config_var, row=1, is_dir=False,
                          filetypes=[("JSON", "*.json")])

        ttk.Checkbutton(frm, text="Include subfolders", variable=self.subdirs_var)\
            .grid(row=2, column=0, sticky="w", pady=2)
        ttk.Checkbutton(frm, text="Dry run", variable=self.dry_run_var)\
            .grid(row=2, column=1, sticky="w", pady=2)

        btns = ttk.Frame(frm)
        btns.grid(row=3, column=0, columnspan=3, sticky="w", pady=8)
        self.btn_preview = ttk.Button(btns, text="Preview", command=self.on_preview)
        self.btn_preview.pack(side="left")
        self.btn_move = ttk.Button(btns, text="Move", command=self.on_move)
        self.btn_move.pack(side="left", padx=(8, 0))
        self.btn_stop = ttk.Button(btns, text="Stop", command=self.on_stop, state="disabled")
        self.btn_stop.pack(side="left", padx=(8, 0))
        self.btn_clear = ttk.Button(btns, text="Clear Log", command=lambda: self._clear_text(self.txt_log))
        self.btn_clear.pack(side="left", padx=(8, 0))

        panes = ttk.PanedWindow(self, orient="vertical")
        panes.pack(fill="both", expand=True, padx=10, pady=(0, 10))

        # Preview list
        list_frame = ttk.Frame(panes)
        self.lst_preview = tk.Listbox(list_frame, height=12)
        self.lst_preview.pack(fill="both", expand=True)
        panes.add(list_frame, weight=1)

        # Log box
        log_frame = ttk.Frame(panes)
        self.txt_log = tk.Text(log_frame, height=10, wrap="none")
        self.txt_log.pack(fill="both", expand=True)
        self._attach_scrollbars(self.txt_log)
        panes.add(log_frame, weight=1)

        # Status bar
        self.status_var = tk.StringVar(value="Ready")
        status = ttk.Label(self, textvariable=self.status_var, anchor="w", relief="sunken")
        status.pack(fill="x", side="bottom")

    def _file_picker(self, parent, label, var, row, is_dir=True, filetypes=None):
        ttk.Label(parent, text=label).grid(row=row, column=0, sticky="w")
        ent = ttk.Entry(parent, textvariable=var, width=70)
        ent.grid(row=row, column=1, sticky="we", padx=5)
        parent.grid_columnconfigure(1, weight=1)

        def browse():
            if is_dir:
                path = filedialog.askdirectory()
            else:
                path = filedialog.askopenfilename(filetypes=filetypes or [("All files", "*.*")])
            if path:
                var.set(path)

        ttk.Button(parent, text="Browse", command=browse).grid(row=row, column=2, padx=5)

    def _attach_scrollbars(self, text_widget: tk.Text):
        yscroll = ttk.Scrollbar(text_widget.master, orient="vertical", command=text_widget.yview)
        xscroll = ttk.Scrollbar(text_widget.master, orient="horizontal", command=text_widget.xview)
        text_widget.configure(yscrollcommand=yscroll.set, xscrollcommand=xscroll.set)
        yscroll.pack(side="right", fill="y")
        xscroll.pack(side="bottom", fill="x")

    # ---------------- Helpers ----------------
    def _clear_text(self, widget: tk.Text):
        widget.delete("1.0", "end")

    def _trim_lines(self, widget: tk.Text, max_lines: int):
        lines = int(widget.index('end-1c').split('.')[0])
        if lines > max_lines:
            widget.delete("1.0", f"{lines - max_lines}.0")

    def log(self, msg: str):
        ts = datetime.now().strftime("%H:%M:%S")
        self.log_q.put(f"[{ts}] {msg}")

    def set_status(self, msg: str):
        self.status_q.put(msg)

    def _poll_queues(self):
        while not self.log_q.empty():
            line = self.log_q.get_nowait()
            self.txt_log.insert("end", line + "\n")
            self.txt_log.see("end")
            self._trim_lines(self.txt_log, MAX_LOG_LINES)

        while not self.rows_q.empty():
            rows = self.rows_q.get_nowait()
            self.lst_preview.delete(0, "end")
            for row in rows:
                self.lst_preview.insert("end", row)

        while not self.status_q.empty():
            self.status_var.set(self.status_q.get_nowait())

        while not self.done_q.empty():
            self.done_q.get_nowait()
            self._finish_worker()

        self.after(100, self._poll_queues)

    # ---------------- Actions ----------------
    def _prepare_run(self) -> Optional[Tuple[Path, CategoryTable]]:
        if self.worker_thread and self.worker_thread.is_alive():
            return None
        try:
            root = resolve_root(self.dir_var.get())
        except InvalidPathError as e:
            messagebox.showerror("Error", str(e))
            return None

        config_text = self.config_var.get().strip()
        config_path = Path(config_text).expanduser() if config_text else None
        table, cat_err = read_categories(config_path)
        if cat_err:
            self.log(f"[WARN] Could not read category file, using defaults: {cat_err}")
            self.logger.warning("Could not read category file, using defaults: %s", cat_err)

        self._save_config(root, config_path)
        return root, table

    def _start_worker(self, target, args, status: str):
        self.stop_requested = False
        self.btn_preview.config(state="disabled")
        self.btn_move.config(state="disabled")
        self.btn_stop.config(state="normal")
        self.status_var.set(status)
        self.worker_thread = threading.Thread(target=target, args=args, daemon=True)
        self.worker_thread.start()

    def on_preview(self):
        prepared = self._prepare_run()
        if not prepared:
            return
        root, table = prepared
        self.lst_preview.delete(0, "end")
        self._start_worker(self._preview_worker, (root, table, self.subdirs_var.get()),
                           "Preparing preview...")

    def on_move(self):
        prepared = self._prepare_run()
        if not prepared:
            return
        root, table = prepared
        args = (root, table, self.subdirs_var.get(), self.dry_run_var.get())
        self._start_worker(self._move_worker, args, "Moving files...")

    def on_stop(self):
        self.stop_requested = True
        self.log("Stop requested. Finishing current file...")

    # ---------------- Workers ----------------
    def _collect(self, root: Path, table: CategoryTable, recursive: bool):
        scanner = FolderScanner(root, recursive=recursive, managed_folders=table.managed_folders)
        try:
            return scanner.scan()
        except CollectError as e:
            self.log(f"[ERROR] {e}")
            self.logger.error("Could not collect files: %s", e)
            self.set_status(f"Error: {e}")
            return None

    def _preview_worker(self, root: Path, table: CategoryTable, recursive: bool):
        try:
            files = self._collect(root, table, recursive)
            if files is None:
                return
            mover = SafeMover(root, table, dry_run=True)
            rows = []
            for rec in files:
                if self.stop_requested:
                    break
                res = mover.move_one(rec)
                if res.status is MoveStatus.FAILED:
                    rows.append(res.describe())
                else:
                    rows.append(f"{res.rel_path} -> {res.dst}")
            self.rows_q.put(rows)
            self.log(f"[INFO] Found {len(files)} files.")
            self.set_status(f"{len(files)} files found.")
        finally:
            self.done_q.put(True)

    def _move_worker(self, root: Path, table: CategoryTable, recursive: bool, dry_run: bool):
        try:
            files = self._collect(root, table, recursive)
            if files is None:
                return
            self.log(f"[INFO] Found {len(files)} files.")
            mover = SafeMover(root, table, dry_run=dry_run)
            results = []
            for rec in files:
                if self.stop_requested:
                    self.log("Stop detected; ending early.")
                    break
                res = mover.move_one(rec)
                self.log(res.describe())
                log_result(self.logger, res)
                results.append(res)

            counts = summarize(results)
            if dry_run:
                self.set_status(f"Dry run finished. {counts.get('planned', 0)} planned, "
                                f"{counts.get('failed', 0)} errors.")
            else:
                self.set_status(f"Done. {counts.get('moved', 0)} moved, "
                                f"{counts.get('failed', 0)} errors.")
            self.rows_q.put([])
        finally:
            self.done_q.put(True)

    def _finish_worker(self):
        self.btn_preview.config(state="normal")
        self.btn_move.config(state="normal")
        self.btn_stop.config(state="disabled")

    # ---------------- Config ----------------
    def _config_path(self) -> Path:
        return Path.home() / ".foldersort" / CONFIG_NAME

    def _load_config(self):
        path = self._config_path()
        if not path.exists():
            return
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            self.logger.warning("Ignoring unreadable GUI settings %s: %s", path, e)
            return
        if not isinstance(data, dict):
            self.logger.warning("Ignoring malformed GUI settings %s", path)
            return
        self.dir_var.set(data.get("dir", ""))
        self.config_var.set(data.get("config", ""))
        self.subdirs_var.set(bool(data.get("subdirs", False)))
        self.dry_run_var.set(bool(data.get("dry_run", True)))

    def _save_config(self, root: Path, config_path: Optional[Path]):
        data = {
            "dir": str(root),
            "config": str(config_path) if config_path else "",
            "subdirs": self.subdirs_var.get(),
            "dry_run": self.dry_run_var.get(),
        }
        try:
            self._config_path().parent.mkdir(parents=True, exist_ok=True)
            self._config_path().write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            self.logger.warning("Could not save GUI settings: %s", e)


if __name__ == "__main__":
    app = FolderSortGUI()
    app.mainloop()
