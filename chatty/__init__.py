"""
Chatty authentication service.

The authentication service is a Flask application that lets users sign up,
sign in and sign out of the Chatty social network. It is the first point of
contact for a new identity, but it is not the place where identities are
durably written: on signup the denormalized user profile is written to the
user cache synchronously, and the authoritative records (the login identity
and the social profile) are handed to background workers via the job
queue.

Context
-------
A successful signup or signin issues a signed session token. The token is
kept in the server-side session under ``jwt`` and returned in the response
body. Protected routes verify the token on every request; the decoded
claims are passed to the view explicitly.

Because persistence is deferred, the cache and the authoritative store can
disagree until the worker commits. A user may be served from the cache
before their rows exist in the database; the read path falls back to the
database when the cache has nothing.
"""
