"""
chewcrew
~~~~~~~~

ChewCrew 后端 —— 多人匿名投票决定去哪吃。
"""
