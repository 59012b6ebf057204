"""TaskFlow CLI tool (taskflowctl)."""

import typer

app = typer.Typer(name="taskflowctl", help="TaskFlow CLI")
api_app = typer.Typer(help="Commands that talk to a running API")
app.add_typer(api_app, name="api")

BASE_URL = typer.Option("http://localhost:8000", help="API base URL")
TOKEN = typer.Option(..., envvar="TASKFLOW_TOKEN", help="Bearer token from `api login`")


@app.command("serve")
def serve(
    host: str = typer.Option("0.0.0.0", help="Host"),
    port: int = typer.Option(8000, help="Port"),
    reload: bool = typer.Option(False, help="Auto-reload"),
):
    """Start the API server."""
    import uvicorn
    uvicorn.run("taskflow.main:app", host=host, port=port, reload=reload)


@app.command("demo-users")
def demo_users():
    """Show the accounts the demo seed creates."""
    from taskflow.core.config import settings
    from taskflow.db.session import init_store

    store = init_store(seed=True)
    for user in store.users:
        typer.echo(f"  {user.username:<14} {user.role.value:<13} {user.email}")
    typer.echo(f"Password for all demo accounts: {settings.DEMO_PASSWORD}")


@app.command("hash-password")
def hash_password_cmd(password: str = typer.Argument(..., help="Plaintext password")):
    """Print a bcrypt hash for a password."""
    from taskflow.core.security import hash_password
    typer.echo(hash_password(password))


@api_app.command("login")
def login(
    username: str = typer.Argument(..., help="Username"),
    password: str = typer.Option(..., prompt=True, hide_input=True),
    base_url: str = BASE_URL,
):
    """Log in and print a bearer token."""
    import httpx
    resp = httpx.post(
        f"{base_url}/api/auth/login",
        json={"username": username, "password": password},
    )
    if resp.status_code != 200:
        typer.echo(resp.json().get("message", resp.text), err=True)
        raise typer.Exit(code=1)
    typer.echo(resp.json()["token"])


@api_app.command("projects")
def list_projects(token: str = TOKEN, base_url: str = BASE_URL):
    """List projects visible to the token's user."""
    import httpx
    resp = httpx.get(
        f"{base_url}/api/projects",
        headers={"Authorization": f"Bearer {token}"},
    )
    resp.raise_for_status()
    for p in resp.json():
        typer.echo(f"  [{p['id']}] {p['name']} ({p['status']}, {p['progress']}%)")


@api_app.command("tasks")
def list_tasks(
    project_id: str = typer.Option(None, help="Project ID; defaults to your assigned tasks"),
    token: str = TOKEN,
    base_url: str = BASE_URL,
):
    """List tasks of a project or assigned to you."""
    import httpx
    resp = httpx.get(
        f"{base_url}/api/tasks",
        params={"projectId": project_id} if project_id else {},
        headers={"Authorization": f"Bearer {token}"},
    )
    resp.raise_for_status()
    for t in resp.json():
        typer.echo(f"  [{t['status']:<11}] {t['title']} ({t['priority']})")


@api_app.command("metrics")
def metrics(token: str = TOKEN, base_url: str = BASE_URL):
    """Show your task metrics."""
    import httpx
    resp = httpx.get(
        f"{base_url}/api/analytics/metrics",
        headers={"Authorization": f"Bearer {token}"},
    )
    resp.raise_for_status()
    for key, value in resp.json().items():
        typer.echo(f"  {key}: {value}")


if __name__ == "__main__":
    app()
