from expense_api.server import run

run()
