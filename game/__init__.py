"""
Game package — view state, camera rig and the per-frame simulation driver.
"""
