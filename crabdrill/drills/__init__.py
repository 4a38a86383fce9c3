"""Worked reference solutions: quizzes, errors, iterators, hash maps and basics."""