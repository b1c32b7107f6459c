from diffclip.main import run

run()
