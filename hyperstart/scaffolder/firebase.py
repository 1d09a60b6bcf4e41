"""Firebase integration installer.

Wires the Firebase JS SDK into the project for any combination of the
auth, database (Firestore) and storage sub-services: SDK config module,
``.env.example`` keys, ``firebase.json`` with security rules, and the React
hooks and helpers of each selected sub-service.
"""

from __future__ import annotations

import json
from collections.abc import Iterable

from hyperstart.models import FirebaseService
from hyperstart.scaffolder.installer import BaseInstaller, InstallResult

# ---------------------------------------------------------------------------
# Environment keys
# ---------------------------------------------------------------------------

CORE_ENV: dict[str, str] = {
    "FIREBASE_API_KEY": "your-api-key-here",
    "FIREBASE_PROJECT_ID": "your-project-id",
    "FIREBASE_MESSAGING_SENDER_ID": "your-sender-id",
    "FIREBASE_APP_ID": "your-app-id",
    "FIREBASE_MEASUREMENT_ID": "your-measurement-id",
}

SERVICE_ENV: dict[FirebaseService, dict[str, str]] = {
    FirebaseService.AUTH: {"FIREBASE_AUTH_DOMAIN": "your-project.firebaseapp.com"},
    FirebaseService.DATABASE: {},
    FirebaseService.STORAGE: {"FIREBASE_STORAGE_BUCKET": "your-project.appspot.com"},
}


def required_env_keys(services: Iterable[FirebaseService]) -> dict[str, str]:
    """Union of the unprefixed keys the given sub-services need."""
    selected = list(services)
    if not selected:
        return {}
    keys = dict(CORE_ENV)
    for service in FirebaseService:
        if service in selected:
            keys.update(SERVICE_ENV[service])
    return keys


def firebase_json(services: Iterable[FirebaseService], hosting_dir: str = "dist") -> dict:
    selected = set(services)
    config: dict = {
        "hosting": {
            "public": hosting_dir,
            "ignore": ["firebase.json", "**/.*", "**/node_modules/**"],
            "rewrites": [{"source": "**", "destination": "/index.html"}],
        }
    }
    if FirebaseService.DATABASE in selected:
        config["firestore"] = {
            "rules": "firestore.rules",
            "indexes": "firestore.indexes.json",
        }
    if FirebaseService.STORAGE in selected:
        config["storage"] = {"rules": "storage.rules"}
    return config


# ---------------------------------------------------------------------------
# FirebaseInstaller
# ---------------------------------------------------------------------------


class FirebaseInstaller(BaseInstaller):
    """Installs and configures the selected Firebase sub-services."""

    name = "firebase"

    async def install(self, services: Iterable[FirebaseService]) -> InstallResult:
        selected = [s for s in FirebaseService if s in set(services)]
        result, mark = self._start()
        if not selected:
            return result

        await self.install_packages(result, ["firebase"])

        ctx = {
            "auth": FirebaseService.AUTH in selected,
            "database": FirebaseService.DATABASE in selected,
            "storage": FirebaseService.STORAGE in selected,
        }
        await self.render("firebase/firebase.js.j2", "src/lib/firebase.js", **ctx)
        await self.merge_env(result, "Firebase", required_env_keys(selected))

        hosting_dir = "dist" if self.layout.is_vite else "out"
        await self.sink.write(
            "firebase.json", json.dumps(firebase_json(selected, hosting_dir), indent=2) + "\n"
        )

        if ctx["auth"]:
            await self._write_auth()
        if ctx["database"]:
            await self._write_database()
        if ctx["storage"]:
            await self._write_storage()

        return self._finish(result, mark)

    # -- Sub-services --------------------------------------------------------

    async def _write_auth(self) -> None:
        layout = self.layout
        await self.render("firebase/useAuth.jsx.j2", layout.hook_path("useAuth"))
        await self.render("firebase/LoginForm.jsx.j2", layout.component_path("auth/LoginForm"))
        await self.render(
            "firebase/ProtectedRoute.jsx.j2", layout.component_path("auth/ProtectedRoute")
        )

    async def _write_database(self) -> None:
        await self.render("firebase/firestore.rules.j2", "firestore.rules")
        await self.sink.write(
            "firestore.indexes.json",
            json.dumps({"indexes": [], "fieldOverrides": []}, indent=2) + "\n",
        )
        await self.render("firebase/useFirestore.js.j2", "src/hooks/useFirestore.js")
        await self.render("firebase/firestoreUtils.js.j2", "src/utils/firestoreUtils.js")

    async def _write_storage(self) -> None:
        await self.render("firebase/storage.rules.j2", "storage.rules")
        await self.render("firebase/useStorage.js.j2", "src/hooks/useStorage.js")
        await self.render("firebase/storageUtils.js.j2", "src/utils/storageUtils.js")
