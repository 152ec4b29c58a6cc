from flowrouter.main import run

run()
