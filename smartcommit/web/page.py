"""Single-page browser UI served at "/"."""

INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Smart Git Commit Assistant</title>
<style>
  body { font-family: system-ui, sans-serif; background: #f3f4f6; margin: 0; color: #111827; }
  main { max-width: 960px; margin: 0 auto; padding: 2rem 1rem; }
  h1 { font-size: 1.75rem; margin-bottom: 0.25rem; }
  .subtitle { color: #6b7280; margin-top: 0; }
  .grid { display: grid; grid-template-columns: 1fr 1fr; gap: 1.5rem; }
  @media (max-width: 720px) { .grid { grid-template-columns: 1fr; } }
  .card { background: #fff; border-radius: 0.5rem; box-shadow: 0 1px 3px rgba(0,0,0,0.1); padding: 1.5rem; }
  .card h2 { font-size: 1.25rem; margin-top: 0; display: flex; justify-content: space-between; }
  .repo { display: flex; gap: 0.5rem; margin-bottom: 1.5rem; }
  .repo input { flex: 1; padding: 0.5rem; border: 1px solid #d1d5db; border-radius: 0.375rem; }
  button { border: 0; border-radius: 0.5rem; padding: 0.5rem 1rem; color: #fff; cursor: pointer; }
  button:disabled { background: #9ca3af !important; cursor: not-allowed; }
  .primary { background: #2563eb; width: 100%; }
  .commit { background: #16a34a; width: 100%; }
  .link { background: none; color: #2563eb; padding: 0; font-size: 0.875rem; }
  textarea { width: 100%; box-sizing: border-box; padding: 0.5rem; border: 1px solid #d1d5db;
             border-radius: 0.5rem; font-family: ui-monospace, monospace; resize: vertical; margin: 1rem 0; }
  .error { background: #fef2f2; border: 1px solid #fecaca; color: #b91c1c; padding: 0.75rem; border-radius: 0.375rem; margin-top: 1rem; }
  .success { background: #f0fdf4; border: 1px solid #bbf7d0; color: #15803d; padding: 0.75rem; border-radius: 0.375rem; margin-top: 1rem; }
  .hidden { display: none; }
  ul { margin: 0.25rem 0 1rem; padding-left: 1rem; font-size: 0.875rem; }
  h3 { font-size: 0.875rem; margin-bottom: 0.25rem; }
  .staged { color: #15803d; } .unstaged { color: #a16207; } .untracked { color: #374151; }
  .tip { font-size: 0.75rem; color: #6b7280; }
</style>
</head>
<body>
<main>
  <h1>Smart Git Commit Assistant</h1>
  <p class="subtitle">Draft commit messages from your staged changes</p>

  <div class="repo">
    <input id="repo-path" value="." aria-label="Repository path">
    <button class="primary" style="width:auto" onclick="loadStatus()">Load</button>
  </div>

  <div class="grid">
    <section class="card">
      <h2>Git Status <button class="link" onclick="loadStatus()">Refresh</button></h2>
      <div id="status">Loading...</div>
      <div id="status-error" class="error hidden"></div>
    </section>

    <section class="card">
      <h2>Commit Message Generator</h2>
      <button id="generate" class="primary" onclick="generateMessage()">Generate Commit Message</button>
      <div id="draft-error" class="error hidden"></div>
      <div id="draft-success" class="success hidden">Commit successful!</div>
      <textarea id="message" rows="8" placeholder="Generated commit message will appear here..."
                oninput="updateButtons()"></textarea>
      <button id="commit" class="commit" onclick="commitChanges()" disabled>Commit Changes</button>
      <p class="tip">Tip: Review and edit the generated message before committing</p>
    </section>
  </div>
</main>
<script>
  const el = (id) => document.getElementById(id);
  let busy = false;

  function repoPath() { return el("repo-path").value.trim() || "."; }

  function show(id, text) { el(id).textContent = text; el(id).classList.remove("hidden"); }
  function hide(id) { el(id).classList.add("hidden"); }

  function updateButtons() {
    el("generate").disabled = busy;
    el("commit").disabled = busy || !el("message").value.trim();
  }

  async function post(url, body) {
    const response = await fetch(url, {
      method: "POST",
      headers: { "Content-Type": "application/json" },
      body: JSON.stringify(body),
    });
    const data = await response.json();
    if (!response.ok) { throw new Error(data.error || "Request failed"); }
    return data;
  }

  function fileList(title, cls, files) {
    if (!files.length) { return ""; }
    const items = files.map((f) => "<li>" + f.replace(/[&<>]/g, (c) => "&#" + c.charCodeAt(0) + ";") + "</li>").join("");
    return '<h3 class="' + cls + '">' + title + " (" + files.length + ")</h3><ul>" + items + "</ul>";
  }

  async function loadStatus() {
    hide("status-error");
    el("status").textContent = "Loading...";
    try {
      const s = await post("/status", { repoPath: repoPath() });
      const body = fileList("Staged Changes", "staged", s.staged)
        + fileList("Unstaged Changes", "unstaged", s.unstaged)
        + fileList("Untracked Files", "untracked", s.untracked);
      el("status").innerHTML = "<p><strong>Branch:</strong> <span id='branch'></span></p>"
        + (body || "<p class='tip'>No changes detected</p>");
      el("branch").textContent = s.branch;
    } catch (err) {
      el("status").textContent = "";
      show("status-error", err.message);
    }
  }

  async function generateMessage() {
    busy = true; updateButtons();
    hide("draft-error"); hide("draft-success");
    el("generate").textContent = "Generating...";
    try {
      const data = await post("/generate-commit", { repoPath: repoPath() });
      el("message").value = data.message;
    } catch (err) {
      show("draft-error", err.message);
    } finally {
      busy = false;
      el("generate").textContent = "Generate Commit Message";
      updateButtons();
    }
  }

  async function commitChanges() {
    const message = el("message").value;
    if (!message.trim()) { show("draft-error", "Commit message cannot be empty"); return; }
    busy = true; updateButtons();
    hide("draft-error");
    el("commit").textContent = "Committing...";
    try {
      await post("/commit", { repoPath: repoPath(), message: message });
      el("message").value = "";
      show("draft-success", "Commit successful!");
      setTimeout(() => hide("draft-success"), 3000);
      loadStatus();
    } catch (err) {
      show("draft-error", err.message);
    } finally {
      busy = false;
      el("commit").textContent = "Commit Changes";
      updateButtons();
    }
  }

  loadStatus();
</script>
</body>
</html>
"""
