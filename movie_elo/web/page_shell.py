"""Shared HTML shell: <head>, header, CSS, and common JavaScript."""

from __future__ import annotations


def head_html() -> str:
    """Return everything inside <head> including meta, fonts, Tailwind config, and all CSS."""
    return """\
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Movie ELO</title>
    <link rel="preconnect" href="https://fonts.googleapis.com" />
    <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin />
    <link href="https://fonts.googleapis.com/css2?family=Geist:wght@400;500;600;700&family=Geist+Mono:wght@400;500&display=swap" rel="stylesheet" />
    <script src="https://cdn.tailwindcss.com"></script>
    <script>
      tailwind.config = {
        darkMode: 'class',
        theme: {
          extend: {
            fontFamily: {
              sans: ['Geist', 'system-ui', '-apple-system', 'sans-serif'],
              mono: ['Geist Mono', 'ui-monospace', 'monospace'],
            },
            colors: {
              g: {
                bg:      'var(--c-bg)',
                subtle:  'var(--c-subtle)',
                surface: 'var(--c-surface)',
                panel:   'var(--c-panel)',
                raised:  'var(--c-raised)',
                border:  'var(--c-border)',
                hover:   'var(--c-hover)',
                muted:   'var(--c-muted)',
                dim:     'var(--c-dim)',
                text:    'var(--c-text)',
                bright:  'var(--c-bright)',
              }
            },
          }
        }
      }
    </script>
    <style>
      /* ---- Theme tokens ---- */
      :root, html.light {
        --c-bg: #f8f9fb; --c-subtle: #f0f1f4; --c-surface: #ffffff;
        --c-panel: #f5f6f8; --c-raised: #edeef1; --c-border: #d5d8de;
        --c-hover: #c8ccd4; --c-muted: #7b8494; --c-dim: #5a6376;
        --c-text: #1e2330; --c-bright: #0d1017;
      }
      html.dark {
        --c-bg: #0a0c10; --c-subtle: #12151b; --c-surface: #171b22;
        --c-panel: #1c2129; --c-raised: #232a33; --c-border: #2a3241;
        --c-hover: #343f50; --c-muted: #545f72; --c-dim: #7c889c;
        --c-text: #c8ced8; --c-bright: #e8ecf2;
      }
      html { -webkit-font-smoothing: antialiased; -moz-osx-font-smoothing: grayscale; }

      ::-webkit-scrollbar { width: 5px; height: 5px; }
      ::-webkit-scrollbar-track { background: transparent; }
      ::-webkit-scrollbar-thumb { background: var(--c-border); border-radius: 3px; }

      input[type="number"]::-webkit-inner-spin-button,
      input[type="number"]::-webkit-outer-spin-button { -webkit-appearance: none; margin: 0; }
      input[type="number"] { -moz-appearance: textfield; }

      button:disabled { opacity: 0.4; cursor: not-allowed; }

      /* Toast */
      @keyframes toastIn { from { opacity: 0; transform: translateY(6px) scale(0.97); } to { opacity: 1; transform: translateY(0) scale(1); } }
      @keyframes toastOut { from { opacity: 1; transform: translateY(0) scale(1); } to { opacity: 0; transform: translateY(6px) scale(0.97); } }
      .toast-enter { animation: toastIn 200ms ease; }
      .toast-leave { animation: toastOut 180ms ease forwards; }

      /* Spinner */
      @keyframes spin { to { transform: rotate(360deg); } }
      .spin { animation: spin 550ms linear infinite; }
    </style>"""


def header_html() -> str:
    """Return the header bar with title and theme toggle."""
    return """\
      <!-- Header -->
      <header class="flex items-center justify-between pb-3.5 mb-3.5 border-b border-g-border">
        <div>
          <h1 class="text-[15px] font-bold tracking-wide text-g-bright">Movie ELO</h1>
          <p class="text-[11px] text-g-muted leading-tight">Rank your movies one head-to-head at a time</p>
        </div>
        <div class="flex bg-g-surface border border-g-border rounded-lg p-0.5 gap-0.5">
          <button class="theme-btn px-2 py-1.5 rounded-md text-[12px] cursor-pointer transition-all duration-150 border-0 bg-transparent text-g-dim" data-theme="light" title="Light">
            <svg class="w-3.5 h-3.5" fill="none" viewBox="0 0 24 24" stroke-width="2" stroke="currentColor"><circle cx="12" cy="12" r="4"/><path d="M12 2v2m0 16v2M4.93 4.93l1.41 1.41m11.32 11.32l1.41 1.41M2 12h2m16 0h2M4.93 19.07l1.41-1.41m11.32-11.32l1.41-1.41"/></svg>
          </button>
          <button class="theme-btn px-2 py-1.5 rounded-md text-[12px] cursor-pointer transition-all duration-150 border-0 bg-transparent text-g-dim" data-theme="dark" title="Dark">
            <svg class="w-3.5 h-3.5" fill="none" viewBox="0 0 24 24" stroke-width="2" stroke="currentColor"><path d="M21 12.79A9 9 0 1111.21 3a7 7 0 009.79 9.79z"/></svg>
          </button>
          <button class="theme-btn px-2 py-1.5 rounded-md text-[12px] cursor-pointer transition-all duration-150 border-0 bg-transparent text-g-dim" data-theme="system" title="System">
            <svg class="w-3.5 h-3.5" fill="none" viewBox="0 0 24 24" stroke-width="2" stroke="currentColor"><rect x="2" y="3" width="20" height="14" rx="2"/><path d="M8 21h8m-4-4v4"/></svg>
          </button>
        </div>
      </header>"""


def shared_js() -> str:
    """Return shared JS: state, theme, toast, spinner, fetchJSON."""
    return """\
      const state = { items: [], matchup: null, canUndo: false, canCompare: false, kFactor: 32 };

      function byId(id) { return document.getElementById(id); }

      function escapeHtml(s) {
        return String(s).replaceAll('&', '&amp;').replaceAll('<', '&lt;').replaceAll('>', '&gt;');
      }

      /* ============ Theme system ============ */
      function getSystemTheme() { return window.matchMedia('(prefers-color-scheme: dark)').matches ? 'dark' : 'light'; }

      function applyTheme(mode) {
        const resolved = mode === 'system' ? getSystemTheme() : mode;
        document.documentElement.classList.toggle('dark', resolved === 'dark');
        document.documentElement.classList.toggle('light', resolved === 'light');
        localStorage.setItem('movie-elo-theme', mode);
        document.querySelectorAll('.theme-btn').forEach(btn => {
          const active = btn.dataset.theme === mode;
          btn.classList.toggle('bg-blue-500/10', active);
          btn.classList.toggle('text-blue-400', active);
        });
      }
      window.matchMedia('(prefers-color-scheme: dark)').addEventListener('change', () => {
        if (localStorage.getItem('movie-elo-theme') === 'system') applyTheme('system');
      });

      /* ============ Toast ============ */
      function showToast(message, type) {
        if (!message) return;
        const container = byId("toast-container");
        const el = document.createElement("div");
        const colorBorder = type === "error" ? "border-red-500/30" : type === "success" ? "border-green-500/30" : "border-g-border";
        const colorText = type === "error" ? "text-red-400" : type === "success" ? "text-green-400" : "text-g-dim";
        el.className = `bg-g-raised border ${colorBorder} rounded-lg px-3.5 py-2 text-[13px] ${colorText} shadow-lg pointer-events-auto max-w-[340px] toast-enter`;
        el.textContent = message;
        container.appendChild(el);
        setTimeout(() => { el.className = el.className.replace("toast-enter", "toast-leave"); setTimeout(() => el.remove(), 200); }, 2800);
      }

      function setSpinner(id, visible) { const el = byId(id); if (el) el.classList.toggle("hidden", !visible); }

      async function fetchJSON(url, options) {
        const baseOptions = options || {};
        const method = String(baseOptions.method || "GET").toUpperCase();
        const queryJoin = url.includes("?") ? "&" : "?";
        const requestUrl = method === "GET" ? `${url}${queryJoin}_ts=${Date.now()}` : url;
        const response = await fetch(requestUrl, { cache: "no-store", ...baseOptions });
        if (!response.ok) {
          let detail = response.statusText;
          try { const p = await response.json(); detail = p.detail || JSON.stringify(p); } catch (err) {}
          throw new Error(typeof detail === "string" ? detail : JSON.stringify(detail));
        }
        return response.json();
      }

      function postJSON(url, body) {
        return fetchJSON(url, { method: "POST", headers: { "Content-Type": "application/json" }, body: JSON.stringify(body || {}) });
      }

      function isTyping(t) { if (!t) return false; const tag = (t.tagName||"").toLowerCase(); return tag === "input" || tag === "textarea" || tag === "select" || t.isContentEditable; }"""


def init_js() -> str:
    """Return the init/bindEvents/keyboard JS for the arena."""
    return """\
      /* ============ Events ============ */
      function bindEvents() {
        document.querySelectorAll(".theme-btn").forEach(b => b.addEventListener("click", () => applyTheme(b.dataset.theme)));

        byId("csv-file").addEventListener("change", (e) => {
          const file = e.target.files[0];
          if (!file) return;
          const reader = new FileReader();
          reader.onload = () => importCsv(String(reader.result || "")).catch(err => showToast(err.message, "error"));
          reader.readAsText(file);
          e.target.value = "";
        });
        byId("btn-start").addEventListener("click", () => loadNextPair().catch(err => showToast(err.message, "error")));
        byId("btn-skip").addEventListener("click", () => skipPair().catch(err => showToast(err.message, "error")));
        byId("btn-undo").addEventListener("click", () => undoLast().catch(err => showToast(err.message, "error")));
        byId("btn-reset").addEventListener("click", () => resetAll().catch(err => showToast(err.message, "error")));
        byId("btn-export").addEventListener("click", () => { window.location.href = "/api/web/export"; });
        document.querySelectorAll("[data-result]").forEach(b => b.addEventListener("click", () => submitResult(b.dataset.result).catch(err => showToast(err.message, "error"))));

        document.addEventListener("keydown", (e) => {
          if (e.defaultPrevented || e.altKey || e.ctrlKey || e.metaKey) return;
          if (isTyping(e.target)) return;
          if (!state.matchup) return;
          const run = (p) => p.catch(err => showToast(err.message, "error"));
          if (e.key === "1" || e.key === "ArrowLeft") { e.preventDefault(); run(submitResult("left")); }
          else if (e.key === "2" || e.key === "ArrowRight") { e.preventDefault(); run(submitResult("right")); }
          else if (e.key === "3" || e.key === "t" || e.key === "T") { e.preventDefault(); run(submitResult("tie")); }
          else if (e.key === "s" || e.key === "S") { e.preventDefault(); run(skipPair()); }
          else if (e.key === "u" || e.key === "U") { e.preventDefault(); run(undoLast()); }
        });
      }

      async function init() {
        bindEvents();
        applyTheme(localStorage.getItem('movie-elo-theme') || 'dark');
        try { applyState(await fetchJSON("/api/web/state")); }
        catch (e) { showToast(e.message, "error"); }
      }
      init();"""
