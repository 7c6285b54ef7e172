from .launcher import run_server

run_server()
