"""Admin login page markup served by GET /api/admin/page-login."""

NOT_FOUND_HTML = "<!doctype html><title>404 Not Found</title><h1>Not Found</h1>"

LOGIN_PAGE_HTML = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width,initial-scale=1" />
  <meta name="robots" content="noindex,nofollow" />
  <title>Admin Login</title>
  <style>
    :root{--bg:#0a1628;--bg2:#1a0a2e;--card:rgba(255,255,255,.06);--border:rgba(255,255,255,.12);--txt:#fff;--muted:rgba(255,255,255,.65);--p:#8b5cf6;}
    *{box-sizing:border-box}
    body{margin:0;font-family:system-ui,-apple-system,Segoe UI,Roboto,Arial;background:linear-gradient(135deg,var(--bg),var(--bg2));min-height:100vh;display:flex;align-items:center;justify-content:center;padding:20px;color:var(--txt)}
    .card{width:100%;max-width:420px;background:var(--card);border:1px solid var(--border);border-radius:16px;padding:32px}
    h1{margin:0 0 8px;font-size:1.6rem} p{margin:0 0 22px;color:var(--muted)}
    label{display:block;margin:14px 0 8px;font-size:.92rem}
    input{width:100%;padding:14px;border-radius:10px;border:1px solid var(--border);background:rgba(255,255,255,.08);color:var(--txt)}
    button{width:100%;margin-top:18px;padding:14px;border:0;border-radius:10px;background:var(--p);color:#fff;font-weight:700;cursor:pointer}
    button:disabled{opacity:.6;cursor:not-allowed}
    .err{display:none;margin-top:14px;padding:12px;border-radius:10px;background:rgba(239,68,68,.18);color:#fecaca}
  </style>
</head>
<body>
  <div class="card">
    <h1>Admin Login</h1>
    <p>Restricted area.</p>
    <div class="err" id="err"></div>
    <label for="u">Username</label>
    <input id="u" autocomplete="username" />
    <label for="p">Password</label>
    <input id="p" type="password" autocomplete="current-password" />
    <button id="btn">Login</button>
  </div>
<script>
const err = document.getElementById('err');
const btn = document.getElementById('btn');
function showErr(msg){ err.textContent = msg; err.style.display = 'block'; }
btn.addEventListener('click', async () => {
  err.style.display = 'none';
  btn.disabled = true;
  try {
    const r = await fetch('/api/admin/login', {
      method: 'POST',
      headers: {'Content-Type': 'application/json'},
      body: JSON.stringify({
        username: document.getElementById('u').value.trim(),
        password: document.getElementById('p').value
      })
    });
    const j = await r.json().catch(() => null);
    if (!r.ok || !j || !j.ok) { showErr((j && j.error) ? j.error : 'Login failed'); return; }
    location.href = '/admin/dashboard';
  } catch (e) {
    showErr('Network error');
  } finally {
    btn.disabled = false;
  }
});
</script>
</body>
</html>
"""
