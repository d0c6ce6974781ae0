"""
main.py — RSVP Reader Flask App
================================
The web server that hosts the reader.

Routes:
  GET  /              – main UI (document list + word frame)
  GET  /api/state     – current state payload
  POST /api/toggle    – play/pause (restarts when finished)
  POST /api/restart   – back to the first word
  POST /api/jump      – jump to word N
  POST /api/select    – select a document
  POST /api/speed     – change speed (persisted)
  POST /api/delete    – delete a document (blacklisted for good)
  POST /api/copy      – copy a document's text to the clipboard
  POST /api/reload    – rescan the clipboard for documents
  POST /api/tick      – the browser's single-shot timer fired

Timing:
  The browser owns the one outstanding timer.  Every response carries
  `tick: {token, delay_ms}` (or null); the page clears its previous
  timeout, waits `delay_ms` and posts the token back.  The engine ignores
  tokens that are no longer current, so a late timer cannot move the
  reader after a pause, selection or speed change.

State management:
  One ReaderSession per process, created and started by create_app().
  Every payload is built from one session.snapshot(), so the state, frame
  and tick in a response always belong together.
"""

import logging
from typing import Optional

from flask import Flask, abort, jsonify, render_template_string, request

import config
from engine import ReaderSession
from host import JsonFileStore, SystemClipboard
from ui import document_list, frame_panel, playback_controls, speed_selector

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# App Factory
# ---------------------------------------------------------------------------
def create_app(session: Optional[ReaderSession] = None) -> Flask:
    """Build the Flask app around `session` (started here if it is not yet)."""
    if session is None:
        clipboard = SystemClipboard()
        clipboard.start_monitoring()
        session = ReaderSession(
            clipboard=clipboard,
            store=JsonFileStore(config.STORE_PATH),
        )
    if not session.started:
        session.start()

    app = Flask(__name__)
    app.config["READER_SESSION"] = session
    logger.info("Serving %d documents", len(session.documents))

    # -----------------------------------------------------------------------
    # Payload helper
    # -----------------------------------------------------------------------
    def state_payload(with_documents: bool = False) -> dict:
        view = session.snapshot()
        tick = view.pending_tick
        payload = {
            "state":         view.state.to_dict(),
            "word":          view.frame.word,
            "markdown":      view.frame.markdown,
            "frame":         frame_panel(view.frame),
            "playback":      playback_controls(view.state),
            "tick":          {"token": tick.token, "delay_ms": tick.delay_ms} if tick else None,
            "notifications": [
                {"title": n.title, "style": n.style, "message": n.message}
                for n in view.notifications
            ],
        }
        if with_documents:
            payload["documents"] = document_list(view.documents, view.state.document_id)
        return payload

    def body() -> dict:
        data = request.get_json(silent=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            abort(400, description="Request body must be a JSON object")
        return data

    @app.errorhandler(400)
    def bad_request(e):
        return jsonify({"error": e.description}), 400

    # -----------------------------------------------------------------------
    # Main UI Route
    # -----------------------------------------------------------------------
    @app.route("/")
    def index():
        view = session.snapshot(drain=False)
        return render_template_string(
            INDEX_TEMPLATE,
            frame=frame_panel(view.frame),
            playback=playback_controls(view.state),
            speed=speed_selector(view.state.wpm),
            documents=document_list(view.documents, view.state.document_id),
        )

    @app.route("/api/state")
    def api_state():
        return jsonify(state_payload())

    # -----------------------------------------------------------------------
    # API: Playback
    # -----------------------------------------------------------------------
    @app.route("/api/toggle", methods=["POST"])
    def api_toggle():
        session.toggle()
        return jsonify(state_payload())

    @app.route("/api/restart", methods=["POST"])
    def api_restart():
        session.restart()
        return jsonify(state_payload())

    @app.route("/api/jump", methods=["POST"])
    def api_jump():
        try:
            index = int(body().get("index", 0))
        except (TypeError, ValueError, OverflowError):
            return jsonify({"error": "Invalid word index"}), 400
        session.jump_to(index)
        return jsonify(state_payload())

    @app.route("/api/tick", methods=["POST"])
    def api_tick():
        try:
            token = int(body().get("token", 0))
        except (TypeError, ValueError, OverflowError):
            return jsonify({"error": "Invalid token"}), 400
        session.tick(token)
        return jsonify(state_payload())

    # -----------------------------------------------------------------------
    # API: Documents
    # -----------------------------------------------------------------------
    @app.route("/api/select", methods=["POST"])
    def api_select():
        doc_id = body().get("id")
        if doc_id not in session.documents:
            return jsonify({"error": "Unknown document"}), 400
        session.select_document(doc_id)
        return jsonify(state_payload())

    @app.route("/api/delete", methods=["POST"])
    def api_delete():
        doc_id = body().get("id") or session.state.document_id
        if doc_id not in session.documents:
            return jsonify({"error": "Unknown document"}), 400
        session.delete_document(doc_id)
        return jsonify(state_payload(with_documents=True))

    @app.route("/api/reload", methods=["POST"])
    def api_reload():
        session.reload()
        return jsonify(state_payload(with_documents=True))

    @app.route("/api/copy", methods=["POST"])
    def api_copy():
        copied = session.copy_document(body().get("id"))
        payload = state_payload()
        payload["copied"] = copied
        return jsonify(payload)

    # -----------------------------------------------------------------------
    # API: Config
    # -----------------------------------------------------------------------
    @app.route("/api/speed", methods=["POST"])
    def api_speed():
        try:
            session.set_speed(body().get("wpm"))
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
        return jsonify(state_payload())

    return app


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>RSVP Reader</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent: #ef4444;
    }

    body {
      font-family: -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    /* Sidebar */
    #sidebar {
      width: 380px;
      background: var(--bg-dark);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 20px 16px;
    }

    #btn-reload { width: 100%; margin-bottom: 14px; }
    #doc-list { list-style: none; }

    .doc-row {
      display: flex;
      align-items: center;
      gap: 8px;
      padding: 10px 12px;
      margin-bottom: 6px;
      border: 1px solid var(--border);
      border-radius: 8px;
      cursor: pointer;
      font-size: 13px;
    }
    .doc-row.selected { border-color: var(--accent); background: var(--bg-panel); }
    .doc-title { flex: 1; }
    .doc-meta { color: var(--text-secondary); font-size: 11px; white-space: nowrap; }

    .empty-view { color: var(--text-secondary); text-align: center; margin-top: 40px; }
    .empty-view h3 { color: var(--text-primary); margin-bottom: 8px; }

    /* Main area */
    #main {
      flex: 1;
      display: flex;
      flex-direction: column;
      align-items: center;
      justify-content: center;
      gap: 20px;
    }

    .frame.fallback { text-align: center; color: var(--text-secondary); }
    .frame.fallback h1 { color: var(--text-primary); margin-bottom: 8px; }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 14px 18px;
      text-align: center;
    }
    .button-row { display: flex; gap: 8px; justify-content: center; margin-bottom: 8px; }
    .finished-badge { color: var(--accent); font-weight: 700; margin-left: 6px; }

    button {
      background: var(--bg-dark);
      color: var(--text-primary);
      border: 1px solid var(--border);
      padding: 6px 12px;
      border-radius: 8px;
      cursor: pointer;
    }

    select {
      width: 100%;
      padding: 8px 10px;
      margin-bottom: 14px;
      background: var(--bg-darker);
      border: 1px solid var(--border);
      border-radius: 8px;
      color: var(--text-primary);
    }

    #toast {
      position: fixed;
      bottom: 20px;
      right: 20px;
      padding: 10px 16px;
      border-radius: 8px;
      background: var(--bg-panel);
      border: 1px solid var(--border);
      display: none;
    }
    #toast.failure { border-color: var(--accent); }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="speed">{{ speed|safe }}</div>
    <button id="btn-reload" title="Rescan the clipboard">Reload clipboard</button>
    <div id="documents">{{ documents|safe }}</div>
  </div>

  <div id="main">
    <div id="frame">{{ frame|safe }}</div>
    <div id="playback">{{ playback|safe }}</div>
  </div>

  <div id="toast"></div>

  <script>
    let tickTimer = null;
    let selectedId = document.querySelector('.doc-row.selected')?.dataset.id || null;

    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      return await res.json();
    }

    function showToast(n) {
      const el = document.getElementById('toast');
      el.textContent = n.message ? `${n.title}: ${n.message}` : n.title;
      el.className = n.style;
      el.style.display = 'block';
      setTimeout(() => { el.style.display = 'none'; }, 2000);
    }

    // one outstanding timer: always clear before scheduling
    function apply(data) {
      if (data.error) { showToast({title: data.error, style: 'failure'}); return; }
      if (tickTimer) { clearTimeout(tickTimer); tickTimer = null; }
      document.getElementById('frame').innerHTML = data.frame;
      document.getElementById('playback').innerHTML = data.playback;
      if (data.documents !== undefined) {
        document.getElementById('documents').innerHTML = data.documents;
        bindRows();
      }
      selectedId = data.state.document_id;
      document.querySelectorAll('.doc-row').forEach(row => {
        row.classList.toggle('selected', row.dataset.id === selectedId);
      });
      (data.notifications || []).forEach(showToast);
      bindPlayback();
      if (data.tick) {
        const token = data.tick.token;
        tickTimer = setTimeout(async () => apply(await post('/api/tick', {token})), data.tick.delay_ms);
      }
    }

    function bindPlayback() {
      document.getElementById('btn-play')?.addEventListener('click', async () => {
        apply(await post('/api/toggle'));
      });
      document.getElementById('btn-restart')?.addEventListener('click', async () => {
        apply(await post('/api/restart'));
      });
    }

    function bindRows() {
      document.querySelectorAll('.doc-row').forEach(row => {
        row.addEventListener('click', async () => {
          apply(await post('/api/select', {id: row.dataset.id}));
        });
        row.querySelector('.btn-copy')?.addEventListener('click', async (e) => {
          e.stopPropagation();
          apply(await post('/api/copy', {id: row.dataset.id}));
        });
        row.querySelector('.btn-delete')?.addEventListener('click', async (e) => {
          e.stopPropagation();
          apply(await post('/api/delete', {id: row.dataset.id}));
        });
      });
    }

    document.getElementById('btn-reload').addEventListener('click', async () => {
      apply(await post('/api/reload'));
    });

    document.getElementById('speed-selector')?.addEventListener('change', async (e) => {
      apply(await post('/api/speed', {wpm: +e.target.value}));
    });

    // Keyboard shortcuts
    document.addEventListener('keydown', async (e) => {
      if (e.target.tagName === 'SELECT') return;
      const mod = e.metaKey || e.ctrlKey;
      if (e.code === 'Space') {
        e.preventDefault();
        apply(await post('/api/toggle'));
      } else if (mod && e.key === 'c' && !window.getSelection().toString()) {
        apply(await post('/api/copy', {id: selectedId}));
      } else if (mod && e.key === 'Backspace' && selectedId) {
        e.preventDefault();
        apply(await post('/api/delete', {id: selectedId}));
      }
    });

    bindRows();
    fetch('/api/state').then(r => r.json()).then(apply);
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
def main() -> None:
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app()
    print("=" * 60)
    print("  RSVP Reader")
    print("  Starting Flask server...")
    print(f"  Open http://{config.HOST}:{config.PORT}")
    print("=" * 60)
    app.run(host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
