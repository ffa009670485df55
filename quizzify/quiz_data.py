"""
Built-in quiz categories, in the same shape as the JSON catalog files.
"""

BUILTIN_QUIZZES = {
    "General Knowledge": [
        {"question": "What is the capital of France?", "options": ["Paris", "Berlin", "Madrid", "Rome"], "correct": 0},
        {"question": "Which year did WW2 end?", "options": ["1940", "1945", "1950", "1939"], "correct": 1},
        {"question": "Who wrote 'Romeo and Juliet'?", "options": ["Charles Dickens", "William Shakespeare", "Jane Austen", "Mark Twain"], "correct": 1},
        {"question": "What is the largest ocean on Earth?", "options": ["Atlantic Ocean", "Indian Ocean", "Arctic Ocean", "Pacific Ocean"], "correct": 3},
        {"question": "In which country is the Great Pyramid of Giza located?", "options": ["Mexico", "Peru", "Egypt", "Sudan"], "correct": 2},
        {"question": "What is the currency of Japan?", "options": ["Won", "Yuan", "Yen", "Rupee"], "correct": 2},
        {"question": "Which planet is known as the Morning Star or Evening Star?", "options": ["Mars", "Venus", "Jupiter", "Mercury"], "correct": 1},
        {"question": "Who painted the Mona Lisa?", "options": ["Vincent van Gogh", "Pablo Picasso", "Leonardo da Vinci", "Claude Monet"], "correct": 2},
        {"question": "What is the tallest mountain in the world?", "options": ["K2", "Kangchenjunga", "Mount Everest", "Lhotse"], "correct": 2},
        {"question": "Which two countries share the longest international border?", "options": ["USA and Canada", "Russia and China", "Argentina and Chile", "Kazakhstan and Russia"], "correct": 0},
    ],
    "Math Quiz": [
        {"question": "What is 2 + 2?", "options": ["3", "4", "5", "6"], "correct": 1},
        {"question": "Solve: 10 * 2", "options": ["10", "20", "30", "40"], "correct": 1},
        {"question": "What is 15 / 3?", "options": ["3", "5", "10", "15"], "correct": 1},
        {"question": "What is the square root of 81?", "options": ["7", "8", "9", "10"], "correct": 2},
        {"question": "If a triangle has angles 90°, 30°, what is the third angle?", "options": ["45°", "60°", "75°", "90°"], "correct": 1},
        {"question": "What is 7 multiplied by 8?", "options": ["48", "54", "56", "64"], "correct": 2},
        {"question": "What is 100 - 43?", "options": ["57", "67", "53", "63"], "correct": 0},
        {"question": "How many sides does a hexagon have?", "options": ["5", "6", "7", "8"], "correct": 1},
        {"question": "What is 25% of 200?", "options": ["25", "50", "75", "100"], "correct": 1},
        {"question": "What is the next prime number after 7?", "options": ["8", "9", "10", "11"], "correct": 3},
    ],
    "Science Quiz": [
        {"question": "Which planet is known as the Red Planet?", "options": ["Earth", "Mars", "Jupiter", "Venus"], "correct": 1},
        {"question": "What is H2O?", "options": ["Oxygen", "Water", "Hydrogen", "Salt"], "correct": 1},
        {"question": "What force pulls objects towards the center of the Earth?", "options": ["Magnetism", "Friction", "Gravity", "Tension"], "correct": 2},
        {"question": "What is the chemical symbol for Gold?", "options": ["Ag", "Au", "Gd", "Go"], "correct": 1},
        {"question": "How many bones are in the adult human body?", "options": ["206", "212", "198", "220"], "correct": 0},
        {"question": "What gas do plants absorb from the atmosphere?", "options": ["Oxygen", "Nitrogen", "Carbon Dioxide", "Hydrogen"], "correct": 2},
        {"question": "What is the hardest natural substance on Earth?", "options": ["Gold", "Iron", "Diamond", "Quartz"], "correct": 2},
        {"question": "Which part of the plant conducts photosynthesis?", "options": ["Root", "Stem", "Flower", "Leaf"], "correct": 3},
        {"question": "What is the boiling point of water in Celsius?", "options": ["90°C", "100°C", "110°C", "120°C"], "correct": 1},
        {"question": "What instrument is used to measure atmospheric pressure?", "options": ["Thermometer", "Barometer", "Hygrometer", "Anemometer"], "correct": 1},
    ],
}
