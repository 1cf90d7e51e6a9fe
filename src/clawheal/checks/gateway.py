# clawheal — Check 2: Gateway health
# Probe /health; kickstart the LaunchAgent if nothing is listening, or kill the
# wedged process first if something is.
# Created: 2026-10-12

from __future__ import annotations

from clawheal import console
from clawheal.checks.base import CheckOutcome, HealContext
from clawheal.heal_log import HealResult

NAME = "Gateway"


def check_gateway(ctx: HealContext) -> CheckOutcome:
    """Ensure the gateway health endpoint answers HTTP 200."""
    console.check("Gateway health endpoint...")
    start = ctx.clock()
    settings = ctx.settings
    port = settings.gateway_port

    http_code = ctx.probe.probe()
    if http_code == 200:
        console.ok("Gateway is healthy (HTTP 200).")
        return CheckOutcome(NAME, True)

    console.warn(f"Gateway returned HTTP {http_code:03d}.")

    pid = ctx.supervisor.pid_on_port(port)
    if pid is None:
        console.heal(f"No process on port {port}. Attempting to restart via launchctl...")
        issue = "gateway_down"
        diagnosis = f"no process on port {port}"
        action = "launchctl kickstart gateway"
        ok_msg = "Gateway restarted successfully."
    else:
        console.info(f"Process {pid} is on port {port} but not responding healthily.")
        console.heal("Killing stale process and restarting...")
        ctx.supervisor.terminate(pid)
        ctx.sleep(settings.gateway_kill_wait_seconds)
        issue = "gateway_unhealthy"
        diagnosis = f"stale process on port {port} (pid {pid})"
        action = "kill + restart"
        ok_msg = "Gateway recovered after killing stale process."

    ctx.supervisor.kickstart(settings.gateway_label)
    console.wait(f"Waiting {settings.gateway_settle_seconds:g} seconds for gateway to start...")
    ctx.sleep(settings.gateway_settle_seconds)

    http_code = ctx.probe.probe()
    duration = ctx.elapsed_ms(start)

    if http_code == 200:
        console.ok(ok_msg)
        entry = ctx.record(issue, diagnosis, action, HealResult.SUCCESS,
                           "HTTP 200 after restart", duration)
        return CheckOutcome(NAME, True, entry)

    console.fail(f"Gateway still unhealthy. HTTP {http_code:03d} after restart.")
    entry = ctx.record(issue, diagnosis, action, HealResult.FAILED,
                       f"HTTP {http_code:03d} after restart", duration)
    return CheckOutcome(NAME, False, entry)
