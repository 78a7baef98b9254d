import os
import subprocess
from dataclasses import dataclass

from flask import current_app


@dataclass
class SSHResult:
    success: bool
    output: str
    error: str = None


def _ssh_argv(command: str):
    host = current_app.config.get("FRONTEND_IP")
    user = current_app.config.get("SSH_USER") or "bitnami"
    key_path = current_app.config.get("SSH_KEY_PATH")
    if not host or not key_path:
        return None

    return [
        "ssh",
        "-i", os.path.expanduser(key_path),
        "-o", "StrictHostKeyChecking=no",
        "-o", "UserKnownHostsFile=/dev/null",
        "-o", "ConnectTimeout=30",
        f"{user}@{host}",
        command,
    ]


def run_remote_command(command: str, timeout: int = None) -> SSHResult:
    """
    Runs a command on the frontend host. Never raises: failures come back
    as an unsuccessful SSHResult.
    """
    argv = _ssh_argv(command)
    if argv is None:
        return SSHResult(False, "", "FRONTEND_IP or SSH_KEY_PATH not configured")

    timeout = timeout or current_app.config.get("SSH_TIMEOUT_SECONDS", 120)
    current_app.logger.info("[SSH] Executing: %s [command]", " ".join(argv[:-1]))

    try:
        proc = subprocess.run(argv, capture_output=True, text=True, timeout=timeout)
    except subprocess.TimeoutExpired:
        return SSHResult(False, "", "SSH command timed out")
    except OSError as exc:
        return SSHResult(False, "", str(exc))

    if proc.returncode == 0:
        return SSHResult(True, proc.stdout)
    return SSHResult(False, proc.stdout, proc.stderr)
