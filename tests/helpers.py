"""Shared test helpers: a fake GitHub REST API on httpx.MockTransport."""

import base64
import json

import httpx

GITHUB_API = "https://api.github.test"


def make_commit(sha: str, date: str, message: str = "change", parents=()) -> dict:
    """Commit payload in the shape returned by the commits API."""
    person = {"name": "Dev", "email": "dev@example.com", "date": date}
    return {
        "sha": sha,
        "commit": {"message": message, "author": person, "committer": person},
        "html_url": f"https://github.com/acme/docs/commit/{sha}",
        "parents": [{"sha": p} for p in parents],
    }


class FakeGitHub:
    """
    In-memory stand-in for the contents and commits endpoints of acme/docs.

    files maps path -> text; directories are implied by file paths.
    commits is newest-first; page_size > 0 splits the listing with Link headers.
    """

    owner = "acme"
    repo = "docs"

    def __init__(self):
        self.files: dict[str, str] = {}
        self.commits: list[dict] = []
        self.page_size = 0
        self.fail_puts = False
        self.requests: list[httpx.Request] = []
        self.puts: list[dict] = []

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def sha_of(self, path: str) -> str:
        return f"sha-{path}-{len(self.files[path])}"

    def _entry(self, path: str, kind: str) -> dict:
        name = path.rsplit("/", 1)[-1]
        entry = {
            "name": name,
            "path": path,
            "sha": self.sha_of(path) if kind == "file" else f"tree-{path}",
            "size": len(self.files[path]) if kind == "file" else 0,
            "type": kind,
            "url": f"{GITHUB_API}/repos/acme/docs/contents/{path}",
        }
        if kind == "file":
            entry["encoding"] = "base64"
            entry["content"] = base64.b64encode(self.files[path].encode("utf-8")).decode("ascii")
        return entry

    def _listing(self, path: str) -> list[dict] | None:
        prefix = f"{path}/" if path else ""
        children: dict[str, str] = {}
        for file_path in self.files:
            if not file_path.startswith(prefix):
                continue
            rest = file_path[len(prefix) :]
            head = rest.split("/", 1)[0]
            kind = "dir" if "/" in rest else "file"
            children[prefix + head] = kind
        if not children:
            return None
        return [self._entry(p, kind) for p, kind in sorted(children.items())]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        base = f"/repos/{self.owner}/{self.repo}"
        path = request.url.path
        not_found = httpx.Response(404, json={"message": "Not Found"})

        if path.startswith(base + "/contents"):
            file_path = path[len(base + "/contents") :].lstrip("/")
            if request.method == "PUT":
                return self._put(file_path, json.loads(request.content))
            if file_path in self.files:
                if request.headers.get("accept") == "application/vnd.github.raw+json":
                    return httpx.Response(200, content=self.files[file_path].encode("utf-8"))
                return httpx.Response(200, json=self._entry(file_path, "file"))
            listing = self._listing(file_path)
            if listing is None:
                return not_found
            return httpx.Response(200, json=listing)

        if path == base + "/commits":
            return self._commit_page(request)

        if path.startswith(base + "/commits/"):
            ref = path[len(base + "/commits/") :]
            for commit in self.commits:
                if commit["sha"] == ref:
                    return httpx.Response(200, json=commit)
            if ref == "bad":
                return httpx.Response(422, json={"message": "No commit found for SHA: bad"})
            return not_found

        return not_found

    def _put(self, file_path: str, body: dict) -> httpx.Response:
        self.puts.append({"path": file_path, **body})
        if self.fail_puts:
            return httpx.Response(500, json={"message": "Server Error"})
        if file_path in self.files and body.get("sha") != self.sha_of(file_path):
            return httpx.Response(409, json={"message": "sha does not match"})
        self.files[file_path] = base64.b64decode(body["content"]).decode("utf-8")
        return httpx.Response(201, json={"content": self._entry(file_path, "file")})

    def _commit_page(self, request: httpx.Request) -> httpx.Response:
        params = request.url.params
        sha = params.get("sha")
        if sha == "missing-branch":
            return httpx.Response(404, json={"message": "Not Found"})
        commits = self.commits
        shas = [c["sha"] for c in commits]
        if sha in shas:
            commits = commits[shas.index(sha) :]
        if params.get("since"):
            commits = [c for c in commits if c["commit"]["committer"]["date"] >= params["since"]]
        if not self.page_size:
            return httpx.Response(200, json=commits)
        page = int(params.get("page", "1"))
        start = (page - 1) * self.page_size
        chunk = commits[start : start + self.page_size]
        headers = {}
        if start + self.page_size < len(commits):
            headers["Link"] = (
                f'<{GITHUB_API}/repos/acme/docs/commits?page={page + 1}>; rel="next"'
            )
        return httpx.Response(200, json=chunk, headers=headers)


