from food_lovers.main import run

run()
