"""Arena section: HTML and JavaScript for importing, comparing and ranking movies."""

from __future__ import annotations


def arena_section_html() -> str:
    """Return the <section id='arena'> HTML block."""
    return """\
      <!-- ==================== Arena ==================== -->
      <section id="arena">
        <!-- Toolbar -->
        <div class="flex items-end gap-2.5 mb-3 flex-wrap">
          <div class="flex flex-col gap-1">
            <label class="text-[10px] font-semibold text-g-muted uppercase tracking-widest" for="csv-file">CSV</label>
            <input id="csv-file" type="file" accept=".csv,text/csv" class="h-[34px] text-xs text-g-dim file:mr-2 file:h-[34px] file:px-3 file:rounded-lg file:border file:border-g-border file:bg-g-surface file:text-g-text file:cursor-pointer" />
          </div>
          <div class="flex flex-col gap-1 w-[120px]">
            <label class="text-[10px] font-semibold text-g-muted uppercase tracking-widest" for="title-col">Title column</label>
            <input id="title-col" type="text" placeholder="title" class="h-[34px] rounded-lg border border-g-border bg-g-surface text-g-text text-[13px] px-2.5 focus:outline-none focus:border-blue-500" />
          </div>
          <div class="flex flex-col gap-1 w-[120px]">
            <label class="text-[10px] font-semibold text-g-muted uppercase tracking-widest" for="elo-col">ELO column</label>
            <input id="elo-col" type="text" placeholder="elo" class="h-[34px] rounded-lg border border-g-border bg-g-surface text-g-text text-[13px] px-2.5 focus:outline-none focus:border-blue-500" />
          </div>
          <div class="flex flex-col gap-1 w-[80px]">
            <label class="text-[10px] font-semibold text-g-muted uppercase tracking-widest" for="k-factor">K</label>
            <input id="k-factor" type="number" min="1" step="1" value="32" class="h-[34px] rounded-lg border border-g-border bg-g-surface text-g-text text-[13px] px-2.5 tabular-nums focus:outline-none focus:border-blue-500" />
          </div>
          <div class="flex gap-0">
            <button id="btn-start" disabled class="h-[34px] px-3 rounded-l-lg border border-blue-500 bg-blue-500 text-white text-xs font-medium cursor-pointer hover:bg-blue-400 transition-all active:scale-95">Start</button>
            <button id="btn-undo" disabled class="h-[34px] px-3 border border-g-border bg-g-surface text-g-text text-xs font-medium cursor-pointer hover:bg-g-panel transition-all">Undo</button>
            <button id="btn-reset" disabled class="h-[34px] px-3 border border-g-border bg-g-surface text-g-text text-xs font-medium cursor-pointer hover:bg-g-panel transition-all">Reset</button>
            <button id="btn-export" disabled class="h-[34px] px-3 rounded-r-lg border border-g-border bg-g-surface text-g-text text-xs font-medium cursor-pointer hover:bg-g-panel transition-all">Export CSV</button>
          </div>
          <div id="arena-spinner" class="w-4 h-4 border-2 border-g-border border-t-blue-500 rounded-full hidden self-center mb-1 spin"></div>
        </div>

        <!-- Empty state -->
        <div id="empty-state">
          <div class="flex flex-col items-center justify-center py-16 text-center border border-g-border rounded-xl bg-g-surface">
            <p id="empty-msg" class="text-sm text-g-muted font-medium">Import a CSV to get started.</p>
            <p class="text-xs text-g-dim mt-1.5 max-w-sm">Load at least two titles, then press Start to compare them head to head.</p>
          </div>
        </div>

        <!-- Matchup -->
        <div id="matchup" class="hidden">
          <div class="grid grid-cols-2 gap-3 mb-3">
            <button data-result="left" class="flex flex-col items-center justify-center gap-2 h-[180px] rounded-xl border border-green-500/25 bg-green-500/5 hover:bg-green-500/10 cursor-pointer transition-all active:scale-[0.99]">
              <span id="left-title" class="text-lg font-semibold text-g-bright px-4 text-center">--</span>
              <span id="left-elo" class="text-xs text-g-dim tabular-nums">ELO: --</span>
            </button>
            <button data-result="right" class="flex flex-col items-center justify-center gap-2 h-[180px] rounded-xl border border-blue-500/25 bg-blue-500/5 hover:bg-blue-500/10 cursor-pointer transition-all active:scale-[0.99]">
              <span id="right-title" class="text-lg font-semibold text-g-bright px-4 text-center">--</span>
              <span id="right-elo" class="text-xs text-g-dim tabular-nums">ELO: --</span>
            </button>
          </div>
          <div class="flex items-center gap-2 px-4 py-2.5 bg-g-surface border border-g-border rounded-xl flex-wrap">
            <span class="text-[11px] font-semibold text-g-muted uppercase tracking-wider mr-1">Pick</span>
            <button class="h-[30px] px-2.5 rounded-lg border border-green-500/25 bg-green-500/10 text-green-400 text-xs font-medium cursor-pointer hover:bg-green-500/20 transition-all active:scale-95" data-result="left">1 · Left</button>
            <button class="h-[30px] px-2.5 rounded-lg border border-blue-500/25 bg-blue-500/10 text-blue-400 text-xs font-medium cursor-pointer hover:bg-blue-500/20 transition-all active:scale-95" data-result="right">2 · Right</button>
            <button class="h-[30px] px-2.5 rounded-lg border border-g-border bg-g-panel text-g-text text-xs font-medium cursor-pointer hover:bg-g-raised transition-all active:scale-95" data-result="tie">3 · Tie</button>
            <div class="flex-1"></div>
            <button id="btn-skip" class="h-[30px] px-2.5 rounded-lg border border-red-500/20 bg-red-500/10 text-red-400 text-xs font-medium cursor-pointer hover:bg-red-500/20 transition-all active:scale-95">S · Skip</button>
          </div>
        </div>

        <!-- Ratings -->
        <div class="mt-3 border border-g-border rounded-xl overflow-hidden bg-g-surface">
          <div class="px-3.5 py-2.5 border-b border-g-border text-[11px] font-semibold text-g-muted uppercase tracking-wider">Rankings</div>
          <table class="w-full border-collapse text-[13px]">
            <thead>
              <tr>
                <th class="px-3.5 py-2 text-left text-[10px] font-semibold text-g-muted uppercase tracking-wider bg-g-subtle border-b border-g-border">#</th>
                <th class="px-3.5 py-2 text-left text-[10px] font-semibold text-g-muted uppercase tracking-wider bg-g-subtle border-b border-g-border">Title</th>
                <th class="px-3.5 py-2 text-left text-[10px] font-semibold text-g-muted uppercase tracking-wider bg-g-subtle border-b border-g-border">ELO</th>
                <th class="px-3.5 py-2 text-left text-[10px] font-semibold text-g-muted uppercase tracking-wider bg-g-subtle border-b border-g-border">Played</th>
              </tr>
            </thead>
            <tbody id="ratings-body"></tbody>
          </table>
        </div>
      </section>"""


def arena_js() -> str:
    """Return arena JavaScript: rendering, import, voting, undo and reset."""
    return """\
      function applyState(data) {
        state.items = data.items || [];
        state.matchup = data.matchup || null;
        state.canUndo = !!data.can_undo;
        state.canCompare = !!data.can_compare;
        if (data.k_factor && !byId("k-factor").dataset.touched) byId("k-factor").value = data.k_factor;
        renderTable();
        renderMatchup();
        byId("btn-start").disabled = !state.canCompare;
        byId("btn-reset").disabled = !state.items.length;
        byId("btn-export").disabled = !state.items.length;
        byId("btn-undo").disabled = !state.canUndo;
      }

      function renderTable() {
        const body = byId("ratings-body");
        body.innerHTML = "";
        if (!state.items.length) {
          body.innerHTML = '<tr><td colspan="4" class="text-center text-g-muted py-4">No movies loaded</td></tr>';
          return;
        }
        state.items.forEach((m, idx) => {
          const tr = document.createElement("tr");
          tr.className = "hover:bg-g-raised/50 transition-colors";
          tr.innerHTML = `<td class="px-3.5 py-2 text-g-dim tabular-nums border-b border-g-border">${idx + 1}</td>
            <td class="px-3.5 py-2 text-g-bright font-medium border-b border-g-border">${escapeHtml(m.title)}</td>
            <td class="px-3.5 py-2 text-g-dim tabular-nums border-b border-g-border">${Math.round(m.rating)}</td>
            <td class="px-3.5 py-2 text-g-dim tabular-nums border-b border-g-border">${m.comparison_count}</td>`;
          body.appendChild(tr);
        });
      }

      function renderMatchup() {
        const pair = state.matchup;
        if (!pair) {
          byId("matchup").classList.add("hidden");
          byId("empty-state").classList.remove("hidden");
          byId("empty-msg").textContent = state.canCompare ? "Press Start to compare." : "Import a CSV with at least two titles.";
          return;
        }
        byId("empty-state").classList.add("hidden");
        byId("matchup").classList.remove("hidden");
        const [left, right] = pair;
        byId("left-title").textContent = left.title;
        byId("right-title").textContent = right.title;
        byId("left-elo").textContent = `ELO: ${Math.round(left.rating)}`;
        byId("right-elo").textContent = `ELO: ${Math.round(right.rating)}`;
      }

      async function importCsv(text) {
        setSpinner("arena-spinner", true);
        try {
          const data = await postJSON("/api/web/import", {
            csv_text: text,
            title_column: byId("title-col").value.trim() || null,
            rating_column: byId("elo-col").value.trim() || null,
          });
          applyState(data.state);
          showToast(`Imported ${data.imported} movies`, "success");
        } catch (err) {
          alert(err.message);
        } finally { setSpinner("arena-spinner", false); }
      }

      async function loadNextPair() {
        applyState(await postJSON("/api/web/next"));
      }

      async function submitResult(result) {
        if (!state.matchup) return;
        const k = Number(byId("k-factor").value);
        const data = await postJSON("/api/web/vote", { result, k_factor: Number.isFinite(k) && k > 0 ? k : null });
        applyState(data.state);
      }

      async function skipPair() {
        if (!state.matchup) return;
        applyState(await postJSON("/api/web/skip"));
      }

      async function undoLast() {
        const data = await postJSON("/api/web/undo");
        applyState(data.state);
        if (data.entry) showToast("Last comparison undone", "success");
      }

      async function resetAll() {
        if (!confirm("Reset all ELO ratings to 1000 and clear history?")) return;
        applyState(await postJSON("/api/web/reset"));
      }

      byId("k-factor").addEventListener("input", (e) => { e.target.dataset.touched = "1"; });"""
