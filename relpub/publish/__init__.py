"""Release publishing workflow: remote, branch, tag, asset, release."""
