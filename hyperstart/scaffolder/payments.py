"""Stripe payments installer.

Browser-side Stripe setup only: the publishable-key loader and a
``useCheckout`` hook that asks the project's own API for a Checkout session.
The secret key and webhook secret are listed in ``.env.example`` for the
server that creates those sessions.
"""

from __future__ import annotations

from hyperstart.scaffolder.installer import BaseInstaller, InstallResult

PUBLIC_ENV: dict[str, str] = {
    "STRIPE_PUBLISHABLE_KEY": "pk_test_your-publishable-key",
    "API_URL": "http://localhost:3001",
}

SERVER_ENV: dict[str, str] = {
    "STRIPE_SECRET_KEY": "sk_test_your-secret-key",
    "STRIPE_WEBHOOK_SECRET": "whsec_your-webhook-secret",
}


class PaymentsInstaller(BaseInstaller):
    """Installs Stripe Checkout support."""

    name = "payments"

    async def install(self, enabled: bool) -> InstallResult:
        result, mark = self._start()
        if not enabled:
            return result

        await self.install_packages(result, ["@stripe/stripe-js"])
        await self.render("payments/stripe.js.j2", "src/lib/stripe.js")
        await self.merge_env(result, "Stripe", PUBLIC_ENV, SERVER_ENV)
        await self.render("payments/useCheckout.js.j2", "src/hooks/useCheckout.js")

        return self._finish(result, mark)
