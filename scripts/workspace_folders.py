import argparse
import json
import os

import requests
from dotenv import load_dotenv


def _request(method: str, url: str, **kwargs):
    resp = requests.request(method, url, timeout=30, **kwargs)
    if resp.status_code >= 400:
        raise SystemExit(f"{method} {url} failed ({resp.status_code}): {resp.text}")
    return resp.json()


def main():
    load_dotenv()
    parser = argparse.ArgumentParser(description="Manage workspace folders through the backend API")
    parser.add_argument(
        "--api",
        default=os.getenv("WORKSPACE_API_URL", f"http://localhost:{os.getenv('PORT', '8080')}/api"),
        help="Backend API base URL",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for name in ("create", "delete", "exists", "list"):
        p = sub.add_parser(name)
        p.add_argument("workspace_id")
        p.add_argument("workspace_name")

    p_url = sub.add_parser("url")
    p_url.add_argument("workspace_id")
    p_url.add_argument("workspace_name")
    p_url.add_argument("file_name")

    sub.add_parser("init")

    args = parser.parse_args()
    base = args.api.rstrip("/")

    if args.command == "init":
        result = _request("POST", f"{base}/workspaces/storage/initialize")
    elif args.command == "create":
        result = _request(
            "POST",
            f"{base}/workspaces/folders",
            json={"id": args.workspace_id, "name": args.workspace_name},
        )
    else:
        folder_url = f"{base}/workspaces/{args.workspace_id}"
        params = {"name": args.workspace_name}
        if args.command == "delete":
            result = _request("DELETE", f"{folder_url}/folder", params=params)
        elif args.command == "exists":
            result = _request("GET", f"{folder_url}/folder", params=params)
        elif args.command == "list":
            result = _request("GET", f"{folder_url}/files", params=params)
        else:
            params["file"] = args.file_name
            result = _request("GET", f"{folder_url}/files/url", params=params)

    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
